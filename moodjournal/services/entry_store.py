"""
Entry store.
Persistent collection of journal entries on top of Flask-SQLAlchemy.
Records go in and come out as plain dictionaries in wire format.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from ..models import Entry
from ..utils.dates import validate_date_key
from ..utils.errors import PersistenceError, ValidationError
from ..utils.mood import MOOD_LABELS, validate_mood_value

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as naive UTC, the form stored in ``entries.created_at``."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EntryStore:
    """Create, list and delete journal entries."""

    def __init__(self, sqlalchemy_db: SQLAlchemy, clock: Optional[Callable[[], datetime]] = None):
        """Initialize the store.

        Args:
            sqlalchemy_db: SQLAlchemy database instance
            clock: Callable returning naive UTC datetimes for ``createdAt``
        """
        self.db = sqlalchemy_db
        self.clock = clock or utc_now

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new entry and return the stored record.

        Args:
            data: ``date``, ``moodValue``, ``moodLabel``, ``text`` and
                ``affirmation``. ``id`` and ``createdAt`` are assigned here.

        Raises:
            ValidationError: empty text, mood value outside [0, 100],
                unknown label or malformed date.
            PersistenceError: the database write failed.
        """
        text = (data.get("text") or "").strip()
        if not text:
            raise ValidationError("Entry text cannot be empty.")
        mood_value = validate_mood_value(data.get("moodValue"))
        mood_label = data.get("moodLabel")
        if mood_label not in MOOD_LABELS:
            raise ValidationError(f"Unknown mood label: {mood_label}")
        date = validate_date_key(data.get("date"))

        entry = Entry(
            date=date,
            created_at=self.clock(),
            mood_value=mood_value,
            mood_label=mood_label,
            text=text,
            affirmation=data.get("affirmation") or ""
        )

        try:
            self.db.session.add(entry)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error(f"Error creating entry: {e}", exc_info=True)
            raise PersistenceError("Failed to save entry. Please try again.") from e

        logger.info(f"Saved entry id: {entry.id}")
        return entry.to_dict()

    def list_all(self) -> List[Dict[str, Any]]:
        """All entries, newest ``createdAt`` first. Empty list if there are none."""
        try:
            entries = self.db.session.execute(
                self.db.select(Entry).order_by(Entry.created_at.desc())
            ).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing entries: {e}", exc_info=True)
            raise PersistenceError("Failed to fetch entries.") from e
        return [entry.to_dict() for entry in entries]

    def get_by_id(self, entry_id: str) -> Optional[Dict[str, Any]]:
        try:
            entry = self.db.session.get(Entry, entry_id)
        except SQLAlchemyError as e:
            logger.error(f"Error getting entry {entry_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to fetch entry.") from e
        return entry.to_dict() if entry else None

    def delete_by_id(self, entry_id: str) -> bool:
        """Delete an entry. Returns False when no entry has that id."""
        try:
            entry = self.db.session.get(Entry, entry_id)
            if entry is None:
                logger.info(f"Delete requested for unknown entry {entry_id}")
                return False
            self.db.session.delete(entry)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error(f"Error deleting entry {entry_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to delete entry. Please try again.") from e

        logger.info(f"Deleted entry {entry_id}")
        return True

    def clear(self) -> int:
        """Delete every entry. Returns the number removed."""
        try:
            removed = self.db.session.execute(delete(Entry)).rowcount
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error(f"Error clearing entries: {e}", exc_info=True)
            raise PersistenceError("Failed to clear entries.") from e
        logger.warning(f"Cleared {removed} entries")
        return removed
