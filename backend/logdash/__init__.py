"""logdash: live terminal dashboard for structured log documents pushed over HTTP."""
