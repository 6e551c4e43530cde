"""
Client view state and its transitions.

``ClientViewState`` holds the navigation state of one page load plus the last
full fetch of entries. All changes go through the named methods below; the
entry cache is only ever replaced as a whole by ``replace_entries``.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .records import EntryRecord, newest_first
from ..utils.dates import validate_date_key
from ..utils.errors import MoodNotLoggedError, NoSelectionError
from ..utils.mood import DEFAULT_MOOD_VALUE, classify_mood, validate_mood_value


class View(str, Enum):
    LOG = "log"
    JOURNAL = "journal"
    HISTORY = "history"


def _first_of_month(day: date) -> date:
    return day.replace(day=1)


@dataclass
class ClientViewState:
    """Navigation state of the journal UI."""
    today: date = field(default_factory=date.today)
    active_view: View = View.LOG
    is_mood_logged: bool = False
    current_mood_value: int = DEFAULT_MOOD_VALUE
    selected_date: Optional[str] = None
    selected_entry_id: Optional[str] = None
    calendar_month: Optional[date] = None
    cached_entries: Tuple[EntryRecord, ...] = ()
    pending_affirmation: Optional[str] = None
    delete_pending: bool = False

    def __post_init__(self):
        if self.selected_date is None:
            self.selected_date = self.today.isoformat()
        if self.calendar_month is None:
            self.calendar_month = _first_of_month(self.today)

    # --- derived values ---

    @property
    def mood_label(self) -> str:
        return classify_mood(self.current_mood_value)

    @property
    def most_recent_entry(self) -> Optional[EntryRecord]:
        return self.cached_entries[0] if self.cached_entries else None

    @property
    def selected_entry(self) -> Optional[EntryRecord]:
        return self.find_entry(self.selected_entry_id)

    def find_entry(self, entry_id: Optional[str]) -> Optional[EntryRecord]:
        if not entry_id:
            return None
        return next((entry for entry in self.cached_entries if entry.id == entry_id), None)

    def entries_for_date(self, date_key: str) -> List[EntryRecord]:
        """Entries on one calendar day, newest first."""
        return [entry for entry in self.cached_entries if entry.date == date_key]

    def dates_with_entries(self) -> set:
        return {entry.date for entry in self.cached_entries}

    # --- transitions ---

    def set_mood(self, value) -> str:
        """Move the mood slider. Returns the label for the new value."""
        self.current_mood_value = validate_mood_value(value)
        return self.mood_label

    def commit_mood(self):
        """Lock in the current mood and open the journal."""
        self.is_mood_logged = True
        self.active_view = View.JOURNAL

    def switch_view(self, view: View):
        """Change the active view.

        Raises:
            MoodNotLoggedError: the journal was requested before a mood was
                committed. The view does not change.
        """
        view = View(view)
        if view is View.JOURNAL and not self.is_mood_logged:
            raise MoodNotLoggedError()
        self.active_view = view

    def show_affirmation(self, affirmation: str):
        self.pending_affirmation = affirmation

    def complete_submission(self):
        """Acknowledge the affirmation: back to the log view, mood must be logged again."""
        self.pending_affirmation = None
        self.is_mood_logged = False
        self.active_view = View.LOG

    def back_to_log(self):
        self.delete_pending = False
        self.active_view = View.LOG

    def replace_entries(self, entries: Sequence[EntryRecord]):
        """Replace the cache with a full fetch. Drops a selection that no longer exists."""
        self.cached_entries = tuple(newest_first(entries))
        if self.selected_entry_id and self.find_entry(self.selected_entry_id) is None:
            self.selected_entry_id = None

    def open_history(self, entry_id: Optional[str] = None) -> Optional[EntryRecord]:
        """Show the history view with the requested entry, else the most recent one.

        With no entries the detail pane is left in its empty state.
        """
        selected = self.find_entry(entry_id) or self.most_recent_entry
        self.selected_entry_id = selected.id if selected else None
        self.delete_pending = False
        self.active_view = View.HISTORY
        return selected

    def select_entry(self, entry_id: str) -> EntryRecord:
        entry = self.find_entry(entry_id)
        if entry is None:
            raise NoSelectionError()
        self.selected_entry_id = entry.id
        return entry

    def select_date(self, date_key: str):
        """Focus a calendar day.

        Raises:
            ValidationError: ``date_key`` is not a real YYYY-MM-DD day. The
                selection does not change.
        """
        self.selected_date = validate_date_key(date_key)

    def change_month(self, delta: int):
        """Move the calendar by ``delta`` months."""
        month_index = self.calendar_month.year * 12 + (self.calendar_month.month - 1) + delta
        self.calendar_month = date(month_index // 12, month_index % 12 + 1, 1)

    def request_delete(self) -> EntryRecord:
        """Open the delete confirmation for the selected entry.

        Raises:
            NoSelectionError: nothing selected, or the selection is gone.
        """
        entry = self.selected_entry
        if entry is None:
            raise NoSelectionError()
        self.delete_pending = True
        return entry

    def cancel_delete(self):
        self.delete_pending = False

    def reselect_after_delete(self, deleted_id: str) -> Optional[EntryRecord]:
        """Apply the post-delete selection rule on a freshly replaced cache.

        If the deleted entry was on display the most recent remaining entry
        takes its place (None when the journal is now empty). Any other
        selection is kept.
        """
        self.delete_pending = False
        if self.selected_entry_id in (None, deleted_id) or self.selected_entry is None:
            most_recent = self.most_recent_entry
            self.selected_entry_id = most_recent.id if most_recent else None
        return self.selected_entry
