from __future__ import annotations

from sqlalchemy import func, select

from mindpath.errors import NotFoundError, ValidationError
from mindpath.models.database import store_session
from mindpath.models.note import Note
from mindpath.services.timestamps import next_timestamp, utc_now_iso

NOTE_NOT_FOUND = "Note not found"


def _validate_field(name: str, value: object) -> str:
    if value is None:
        raise ValidationError(f"{name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    if not value:
        raise ValidationError(f"{name} must not be empty")
    return value


def _serialize(note: Note) -> dict[str, object]:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "last_updated": note.last_updated,
    }


def _owned_note(session, owner: str, note_id: int) -> Note:
    # Another owner's note is reported exactly like a missing one.
    note = session.execute(
        select(Note).where(Note.id == note_id, Note.owner == owner)
    ).scalar_one_or_none()
    if note is None:
        raise NotFoundError(NOTE_NOT_FOUND)
    return note


def create_note(owner: str, title: object, content: object) -> dict[str, object]:
    title = _validate_field("Title", title)
    content = _validate_field("Content", content)

    with store_session() as session:
        note = Note(
            owner=owner,
            title=title,
            content=content,
            last_updated=utc_now_iso(),
        )
        session.add(note)
        session.commit()
        session.refresh(note)
        return _serialize(note)


def list_notes(owner: str) -> list[dict[str, object]]:
    with store_session() as session:
        notes = session.execute(
            select(Note)
            .where(Note.owner == owner)
            .order_by(Note.last_updated.desc(), Note.id.desc())
        ).scalars().all()
        return [_serialize(note) for note in notes]


def latest_notes(owner: str, limit: int) -> list[dict[str, object]]:
    with store_session() as session:
        notes = session.execute(
            select(Note)
            .where(Note.owner == owner)
            .order_by(Note.last_updated.desc(), Note.id.desc())
            .limit(limit)
        ).scalars().all()
        return [_serialize(note) for note in notes]


def count_notes(owner: str) -> int:
    with store_session() as session:
        return session.execute(
            select(func.count(Note.id)).where(Note.owner == owner)
        ).scalar_one()


def get_note(owner: str, note_id: int) -> dict[str, object]:
    with store_session() as session:
        return _serialize(_owned_note(session, owner, note_id))


def update_note(
    owner: str, note_id: int, title: object, content: object
) -> dict[str, object]:
    title = _validate_field("Title", title)
    content = _validate_field("Content", content)

    with store_session() as session:
        note = _owned_note(session, owner, note_id)
        note.title = title
        note.content = content
        note.last_updated = next_timestamp(note.last_updated)
        session.commit()
        session.refresh(note)
        return _serialize(note)


def patch_note(
    owner: str,
    note_id: int,
    title: object = None,
    content: object = None,
) -> dict[str, object]:
    """Update only the supplied fields, keeping stored values for the rest."""
    if title is not None:
        title = _validate_field("Title", title)
    if content is not None:
        content = _validate_field("Content", content)

    with store_session() as session:
        note = _owned_note(session, owner, note_id)
        if title is not None:
            note.title = title
        if content is not None:
            note.content = content
        note.last_updated = next_timestamp(note.last_updated)
        session.commit()
        session.refresh(note)
        return _serialize(note)


def delete_note(owner: str, note_id: int) -> dict[str, object]:
    with store_session() as session:
        note = _owned_note(session, owner, note_id)
        session.delete(note)
        session.commit()
    return {"message": "Note deleted successfully", "id": note_id}
