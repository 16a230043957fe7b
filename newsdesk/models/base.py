"""Base model class for newsroom records."""

from pydantic import BaseModel, ConfigDict


class RecordModel(BaseModel):
    """Base model for immutable records.

    Records are never mutated in place; changes go through ``model_copy``.
    """

    model_config = ConfigDict(frozen=True)
