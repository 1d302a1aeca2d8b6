"""
Noteful Backend — Notes Route Handlers
========================================

What:  CRUD endpoints for /notes.
How:   `create_notes_router(store)` closes over a NoteStore; each handler
       validates the body, calls the store and shapes the response.

Endpoint Summary:
    GET    /notes        → 200 [Note]
    GET    /notes/{id}   → 200 Note               | 404
    POST   /notes        → 201 Note + Location    | 400 | 404 (folder)
    PATCH  /notes/{id}   → 204                    | 400 | 404
    DELETE /notes/{id}   → 204                    | 404
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Response

from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteResponse
from noteful.services import validation
from noteful.services.note_store import NoteStore

logger = logging.getLogger(__name__)

# POST /notes: checked in this order, first missing one is reported
REQUIRED_FIELDS = ("name", "content", "folderId")

# PATCH /notes/{id}
UPDATABLE_FIELDS = ("name", "content")

NOT_FOUND = {404: {"description": "Note doesn't exist", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}


def create_notes_router(store: NoteStore) -> APIRouter:
    """Builds the /notes router bound to `store`."""

    router = APIRouter(prefix="/notes", tags=["Notes"])

    @router.get(
        "",
        response_model=List[NoteResponse],
        summary="List all notes",
    )
    async def list_notes() -> List[NoteResponse]:
        notes = await store.list()
        return [NoteResponse.model_validate(note) for note in notes]

    @router.post(
        "",
        status_code=201,
        response_model=NoteResponse,
        responses={**BAD_REQUEST, 404: {"description": "Folder doesn't exist", "model": ErrorResponse}},
        summary="Create a note in an existing folder",
    )
    async def create_note(
        response: Response,
        body: Dict[str, Any] = Body(...),
    ) -> NoteResponse:
        """
        Creates a note.

        Validation (before any database access):
            1. `name`, `content`, `folderId` present, in that order
            2. `name`/`content` are strings, `folderId` is an integer

        The Location header points at the new resource: /notes/<id>.
        """
        validation.require_fields(body, REQUIRED_FIELDS)
        validation.ensure_string(body, "name")
        validation.ensure_string(body, "content")
        folder_id = validation.coerce_int(body["folderId"], "folderId")

        note = await store.create(
            name=body["name"],
            content=body["content"],
            folder_id=folder_id,
        )
        response.headers["Location"] = f"/notes/{note.id}"
        return NoteResponse.model_validate(note)

    @router.get(
        "/{note_id}",
        response_model=NoteResponse,
        responses=NOT_FOUND,
        summary="Get a single note by id",
    )
    async def get_note(note_id: int) -> NoteResponse:
        note = await store.get(note_id)
        return NoteResponse.model_validate(note)

    @router.patch(
        "/{note_id}",
        status_code=204,
        response_class=Response,
        responses={**BAD_REQUEST, **NOT_FOUND},
        summary="Update a note's name and/or content",
    )
    async def update_note(
        note_id: int,
        body: Dict[str, Any] = Body(...),
    ) -> Response:
        """
        Partial update. Unknown keys are ignored; at least one of
        `name`/`content` is required. `modified` is re-stamped by the store.
        """
        validation.require_any(body, UPDATABLE_FIELDS)
        for field in UPDATABLE_FIELDS:
            validation.ensure_string(body, field)

        await store.update(note_id, validation.pick_fields(body, UPDATABLE_FIELDS))
        return Response(status_code=204)

    @router.delete(
        "/{note_id}",
        status_code=204,
        response_class=Response,
        responses=NOT_FOUND,
        summary="Delete a note",
    )
    async def delete_note(note_id: int) -> Response:
        await store.delete(note_id)
        return Response(status_code=204)

    return router
