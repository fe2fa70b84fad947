"""Shared base model for stored documents."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class TrackerModel(BaseModel):
    """Base for documents read back from the store.

    Rows may carry nulls or be missing fields written by older clients, so
    ``None`` values are dropped before validation and the field defaults
    apply. Unknown keys (``_id``, ``user_id``) are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
