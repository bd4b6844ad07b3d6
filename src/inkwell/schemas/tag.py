# src/inkwell/schemas/tag.py
"""Tag-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class TagResponse(BaseModel):
    """Tags are exposed by name only."""

    name: str

    model_config = ConfigDict(from_attributes=True)
