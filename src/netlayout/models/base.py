"""Common base for Layout models."""

from pydantic import BaseModel, ConfigDict


class LayoutModel(BaseModel):
    """Base model for every Layout entity.

    Field names are snake_case in Python while the persisted form uses the
    hyphenated keys of the Layout format; both spellings are accepted on
    input.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")
