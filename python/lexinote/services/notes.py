"""Translation notebook service layer.

Every statement filters on the owner in SQL; a note owned by someone else is
indistinguishable from a missing one.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lexinote.db.models import TranslationNote
from lexinote.db.session import transaction
from lexinote.errors import ApiErrorCode, NotFoundError
from lexinote.logging import get_logger
from lexinote.schemas.notes import NoteCreate, NoteOut

logger = get_logger(__name__)


def list_notes(db: Session, user_id: UUID) -> list[NoteOut]:
    """List a user's saved translations, newest first."""
    stmt = (
        select(TranslationNote)
        .where(TranslationNote.user_id == user_id)
        .order_by(TranslationNote.created_at.desc(), TranslationNote.id)
    )
    return [NoteOut.model_validate(note) for note in db.scalars(stmt).all()]


def create_note(db: Session, user_id: UUID, payload: NoteCreate) -> NoteOut:
    note = TranslationNote(user_id=user_id, **payload.model_dump())
    with transaction(db):
        db.add(note)

    logger.info("note_created", note_id=str(note.id))
    return NoteOut.model_validate(note)


def delete_note(db: Session, user_id: UUID, note_id: UUID) -> None:
    """Delete one of the user's notes.

    Raises:
        NotFoundError: E_NOTE_NOT_FOUND if no note with this id belongs to the user.
    """
    with transaction(db):
        result = db.execute(
            delete(TranslationNote).where(
                TranslationNote.id == note_id,
                TranslationNote.user_id == user_id,
            )
        )

    if result.rowcount == 0:
        raise NotFoundError(ApiErrorCode.E_NOTE_NOT_FOUND, "Note not found")

    logger.info("note_deleted", note_id=str(note_id))
