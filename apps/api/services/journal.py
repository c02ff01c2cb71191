"""Daily journal entries: free text plus 1-10 mood and energy ratings."""

from datetime import datetime, timezone
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from models import JournalEntry
from schemas import JournalEntryCreate


def create_entry(db: Session, user_id: UUID, payload: JournalEntryCreate) -> JournalEntry:
    entry = JournalEntry(
        user_id=user_id,
        content=payload.content,
        mood=payload.mood,
        energy_level=payload.energy_level,
        photo_url=payload.photo_url or None,
        date=payload.date or datetime.now(timezone.utc),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_entries(db: Session, user_id: UUID) -> List[JournalEntry]:
    return (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id)
        .order_by(JournalEntry.date.desc(), JournalEntry.id.desc())
        .all()
    )
