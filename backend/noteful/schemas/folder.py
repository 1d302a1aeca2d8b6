"""
Noteful Backend — Folder Schemas
=================================

What:  Response model for folders.
How:   Built from the ORM object (`from_attributes`); `name` passes through
       the sanitizer on the way out, so stored markup is never echoed raw.
"""

from pydantic import BaseModel, Field, field_validator

from noteful.services.sanitizer import sanitize


class FolderResponse(BaseModel):
    """
    Example:
        {"id": 1, "name": "Important"}
    """
    id: int = Field(description="Folder identifier, generated on insert")
    name: str = Field(description="Folder name (sanitized)")

    model_config = {"from_attributes": True}

    @field_validator("name")
    @classmethod
    def sanitize_name(cls, v: str) -> str:
        return sanitize(v)
