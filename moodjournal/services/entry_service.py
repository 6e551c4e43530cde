"""
Entry service: submit, list and delete journal entries.

Combines the affirmation provider with the entry store. Provider failures
never reach this layer; store failures surface as PersistenceError.
"""
import logging
from datetime import date as date_cls
from typing import Any, Dict, List, Optional

from flask_sqlalchemy import SQLAlchemy

from .entry_store import EntryStore
from ..utils.dates import validate_date_key
from ..utils.affirmation_service import AffirmationProvider
from ..utils.errors import NoSelectionError, ValidationError
from ..utils.mood import classify_mood, validate_mood_value

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 2


class EntryService:
    """Journal entry operations used by the HTTP layer."""

    def __init__(self, store: EntryStore, provider: AffirmationProvider):
        self.store = store
        self.provider = provider

    def submit(self, raw_text: Optional[str], mood_value: Any,
               mood_label: Optional[str] = None, date: Optional[str] = None) -> Dict[str, Any]:
        """Validate, generate an affirmation and store a new entry.

        Args:
            raw_text: Journal body as typed; it is trimmed before storing.
            mood_value: Slider value in [0, 100].
            mood_label: Label the client showed. Must match the value's band;
                derived from the value when omitted.
            date: YYYY-MM-DD day the entry belongs to; defaults to today.

        Returns:
            The stored entry, including ``id``, ``createdAt`` and ``affirmation``.

        Raises:
            ValidationError: text shorter than two characters after trimming,
                bad mood value, mismatched label or bad date. Nothing is
                generated or stored.
            PersistenceError: the store could not save the entry.
        """
        text = (raw_text or "").strip()
        if len(text) < MIN_TEXT_LENGTH:
            raise ValidationError("text too short")

        mood_value = validate_mood_value(mood_value)
        expected_label = classify_mood(mood_value)
        if mood_label is None:
            mood_label = expected_label
        elif mood_label != expected_label:
            raise ValidationError(
                f"Mood label '{mood_label}' does not match mood value {mood_value} ({expected_label})."
            )

        date = validate_date_key(date) if date is not None else date_cls.today().isoformat()

        logger.info(f"Received entry: {mood_label} ({mood_value}/100), {len(text)} chars")
        affirmation = self.provider.generate(text, mood_label, mood_value)

        return self.store.create({
            "date": date,
            "moodValue": mood_value,
            "moodLabel": mood_label,
            "text": text,
            "affirmation": affirmation,
        })

    def generate_affirmation(self, text: Optional[str], mood_label: Optional[str] = None,
                             mood_value: Optional[int] = None) -> str:
        return self.provider.generate((text or "").strip(), mood_label, mood_value)

    def list_entries(self) -> List[Dict[str, Any]]:
        return self.store.list_all()

    def get_entry(self, entry_id: str) -> Optional[Dict[str, Any]]:
        if not entry_id:
            raise NoSelectionError()
        return self.store.get_by_id(entry_id)

    def delete(self, entry_id: Optional[str]) -> bool:
        """Delete an entry by id.

        Returns:
            False if no entry had that id. Callers refetch either way.

        Raises:
            NoSelectionError: no id was given.
            PersistenceError: the store could not delete the entry.
        """
        if not entry_id:
            raise NoSelectionError()
        return self.store.delete_by_id(entry_id)


def init_entry_service(app, db: SQLAlchemy) -> EntryService:
    """Initialize the entry service in Flask application context.

    Args:
        app: Flask application
        db: SQLAlchemy database instance

    Returns:
        EntryService instance
    """
    service = EntryService(
        store=EntryStore(db),
        provider=AffirmationProvider.from_config(app.config),
    )
    app.entry_service = service
    return service
