"""
Entry model for mood journal entries.
"""
from datetime import timezone
from uuid import uuid4
from typing import Dict, Any

from sqlalchemy import Column, String, Text, DateTime, Integer

from . import db


class Entry(db.Model):
    """A journal entry. Immutable once written; only deletion changes it."""
    __tablename__ = 'entries'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    created_at = Column(DateTime, nullable=False, index=True)  # naive UTC
    mood_value = Column(Integer, nullable=False)
    mood_label = Column(String(20), nullable=False)
    text = Column(Text, nullable=False)
    affirmation = Column(Text, nullable=False, default='')

    def __init__(self, date: str, created_at, mood_value: int, mood_label: str,
                 text: str, affirmation: str = ""):
        """Initialize a journal entry.

        Args:
            date: Calendar day the entry belongs to, as YYYY-MM-DD.
            created_at: Store-assigned write time (naive UTC).
            mood_value: Slider value in [0, 100].
            mood_label: Label derived from mood_value at write time.
            text: Trimmed journal body.
            affirmation: Affirmation generated for this entry.
        """
        self.id = str(uuid4())
        self.date = date
        self.created_at = created_at
        self.mood_value = mood_value
        self.mood_label = mood_label
        self.text = text
        self.affirmation = affirmation

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to its wire representation (camelCase keys)."""
        created_at = None
        if self.created_at:
            created_at = self.created_at.replace(tzinfo=timezone.utc).isoformat()
        return {
            "id": self.id,
            "date": self.date,
            "createdAt": created_at,
            "moodValue": self.mood_value,
            "moodLabel": self.mood_label,
            "text": self.text,
            "affirmation": self.affirmation,
        }

    def __repr__(self) -> str:
        return f"<Entry {self.id} {self.date} {self.mood_label}>"
