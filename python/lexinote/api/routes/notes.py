"""Translation notebook routes.

Route handlers for the signed-in user's saved translations.
Routes are transport-only: each calls exactly one service function.

- GET /notes: list the viewer's notes, newest first
- POST /notes: save a translation
- DELETE /notes/{note_id}: delete one of the viewer's notes

All routes require authentication.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lexinote.api.deps import get_db
from lexinote.auth.middleware import Viewer, get_viewer
from lexinote.responses import success_response
from lexinote.schemas.notes import NoteCreate
from lexinote.services import notes as notes_service

router = APIRouter(tags=["notes"])


@router.get("/notes")
def list_notes(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    notes = notes_service.list_notes(db, viewer.user_id)
    return success_response([n.model_dump(mode="json") for n in notes])


@router.post("/notes", status_code=201)
def create_note(
    body: NoteCreate,
    viewer: Annotated[Viewer, Depends(get_viewer)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    note = notes_service.create_note(db, viewer.user_id, body)
    return success_response(note.model_dump(mode="json"))


@router.delete("/notes/{note_id}")
def delete_note(
    note_id: UUID,
    viewer: Annotated[Viewer, Depends(get_viewer)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Delete a note.

    Errors:
        E_NOTE_NOT_FOUND (404): No such note for this viewer (including notes owned by others)
    """
    notes_service.delete_note(db, viewer.user_id, note_id)
    return success_response({"success": True})
