"""
Noteful Backend — Note Schemas
===============================

What:  Response model for notes.
Why:   Separates the API contract from the table layout: the column is
       `folder_id`, the JSON key is `folderId`.
How:   Built from the ORM object (`from_attributes`). Text fields pass
       through the sanitizer; `modified` is normalized to UTC.

Timestamp normalization:
    PostgreSQL returns timezone-aware datetimes, SQLite returns naive ones
    for the same column. Naive values are read as UTC so a note serializes
    identically right after POST and on every later GET.
"""

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, Field, field_validator

from noteful.services.sanitizer import sanitize


class NoteResponse(BaseModel):
    """
    Example:
        {
            "id": 2,
            "name": "Cats",
            "content": "Lorem ipsum...",
            "folderId": 1,
            "modified": "2026-10-19T09:30:00.123456Z"
        }
    """
    id: int = Field(description="Note identifier, generated on insert")
    name: str = Field(description="Note title (sanitized)")
    content: str = Field(description="Note body (sanitized)")
    folder_id: int = Field(
        validation_alias=AliasChoices("folderId", "folder_id"),
        serialization_alias="folderId",
        description="Folder the note is filed under",
    )
    modified: datetime = Field(description="Last create/update time (UTC, ISO 8601)")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_validator("name", "content")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        return sanitize(v)

    @field_validator("modified")
    @classmethod
    def normalize_modified(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
