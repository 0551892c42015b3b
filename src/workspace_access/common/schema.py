"""Shared Pydantic base model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base class for stored documents and API payloads.

    Fields are declared in snake_case and exchanged in camelCase, which is
    how tenant and project documents are persisted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    def to_document(self, **kwargs: Any) -> dict[str, Any]:
        """Return the JSON-compatible camelCase document for storage."""

        return self.model_dump(mode="json", by_alias=True, **kwargs)


__all__ = ["BaseSchema"]
