"""Pydantic models for ingested log documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

U32_MAX = 2**32 - 1

Projection = dict[str, Any]


class Column(BaseModel):
    name: str
    column_type: str = Field(alias="type")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class LogDocument(BaseModel):
    """One ingested batch: row values, elapsed time and the column schema."""

    values: list[list[Any]] = Field(description="Rows of JSON values, positional per column")
    took: int = Field(ge=0, le=U32_MAX, strict=True, description="Processing time reported upstream")
    columns: list[Column] = Field(description="Name and type for each row position")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @classmethod
    def empty(cls) -> "LogDocument":
        return cls(values=[[]], took=0, columns=[])

    @property
    def rows(self) -> list[list[Any]]:
        return self.values

    @property
    def elapsed(self) -> int:
        return self.took

    def to_wire(self) -> dict[str, Any]:
        """Dump using the wire key names (``type`` rather than ``column_type``)."""
        return self.model_dump(by_alias=True)


def project(document: LogDocument) -> Projection:
    """Map each column name to its value in the first row.

    Columns without a value at their position are skipped, so mismatched
    lengths (or a document with no rows at all) never raise.
    """
    if not document.values:
        return {}
    first_row = document.values[0]
    return {column.name: value for column, value in zip(document.columns, first_row)}


__all__ = ["Column", "LogDocument", "Projection", "U32_MAX", "project"]
