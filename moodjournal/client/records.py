"""
Client-side copy of a stored journal entry.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from ..utils.errors import PersistenceError


@dataclass(frozen=True)
class EntryRecord:
    """An entry as returned by the server. Read-only on the client."""
    id: str
    date: str
    created_at: datetime
    mood_value: int
    mood_label: str
    text: str
    affirmation: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntryRecord":
        """Build a record from the wire format.

        Raises:
            PersistenceError: the payload is missing fields or malformed.
        """
        try:
            created_at = datetime.fromisoformat(data["createdAt"])
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            return cls(
                id=str(data["id"]),
                date=data["date"],
                created_at=created_at,
                mood_value=int(data["moodValue"]),
                mood_label=data["moodLabel"],
                text=data["text"],
                affirmation=data.get("affirmation") or "",
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError("Received a malformed entry from the server.") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "createdAt": self.created_at.isoformat(),
            "moodValue": self.mood_value,
            "moodLabel": self.mood_label,
            "text": self.text,
            "affirmation": self.affirmation,
        }


def newest_first(entries: Iterable[EntryRecord]) -> List[EntryRecord]:
    """Sort by ``created_at`` descending. Ties keep their incoming order."""
    return sorted(entries, key=lambda entry: entry.created_at, reverse=True)
