"""
Noteful Backend — Folders Route Handlers
==========================================

What:  CRUD endpoints for /folders, plus the notes-in-folder listing.

Endpoint Summary:
    GET    /folders             → 200 [Folder]
    GET    /folders/{id}        → 200 Folder              | 404
    GET    /folders/{id}/notes  → 200 [Note]              | 404
    POST   /folders             → 201 Folder + Location   | 400
    PATCH  /folders/{id}        → 204                     | 400 | 404
    DELETE /folders/{id}        → 204 (cascades to notes) | 404
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Response

from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderResponse
from noteful.schemas.note import NoteResponse
from noteful.services import validation
from noteful.services.folder_store import FolderStore
from noteful.services.note_store import NoteStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name",)
UPDATABLE_FIELDS = ("name",)

NOT_FOUND = {404: {"description": "Folder doesn't exist", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}


def create_folders_router(store: FolderStore, notes: NoteStore) -> APIRouter:
    """
    Builds the /folders router.

    `notes` serves GET /folders/{id}/notes; every other endpoint only
    touches `store`.
    """

    router = APIRouter(prefix="/folders", tags=["Folders"])

    @router.get("", response_model=List[FolderResponse], summary="List all folders")
    async def list_folders() -> List[FolderResponse]:
        folders = await store.list()
        return [FolderResponse.model_validate(folder) for folder in folders]

    @router.post(
        "",
        status_code=201,
        response_model=FolderResponse,
        responses=BAD_REQUEST,
        summary="Create a folder",
    )
    async def create_folder(
        response: Response,
        body: Dict[str, Any] = Body(...),
    ) -> FolderResponse:
        validation.require_fields(body, REQUIRED_FIELDS)
        validation.ensure_string(body, "name")

        folder = await store.create(name=body["name"])
        response.headers["Location"] = f"/folders/{folder.id}"
        return FolderResponse.model_validate(folder)

    @router.get(
        "/{folder_id}",
        response_model=FolderResponse,
        responses=NOT_FOUND,
        summary="Get a single folder by id",
    )
    async def get_folder(folder_id: int) -> FolderResponse:
        folder = await store.get(folder_id)
        return FolderResponse.model_validate(folder)

    @router.get(
        "/{folder_id}/notes",
        response_model=List[NoteResponse],
        responses=NOT_FOUND,
        summary="List the notes filed in a folder",
    )
    async def list_folder_notes(folder_id: int) -> List[NoteResponse]:
        folder_notes = await notes.list(folder_id=folder_id)
        return [NoteResponse.model_validate(note) for note in folder_notes]

    @router.patch(
        "/{folder_id}",
        status_code=204,
        response_class=Response,
        responses={**BAD_REQUEST, **NOT_FOUND},
        summary="Rename a folder",
    )
    async def update_folder(
        folder_id: int,
        body: Dict[str, Any] = Body(...),
    ) -> Response:
        validation.require_any(body, UPDATABLE_FIELDS)
        validation.ensure_string(body, "name")

        await store.update(folder_id, validation.pick_fields(body, UPDATABLE_FIELDS))
        return Response(status_code=204)

    @router.delete(
        "/{folder_id}",
        status_code=204,
        response_class=Response,
        responses=NOT_FOUND,
        summary="Delete a folder and every note in it",
    )
    async def delete_folder(folder_id: int) -> Response:
        await store.delete(folder_id)
        return Response(status_code=204)

    return router
