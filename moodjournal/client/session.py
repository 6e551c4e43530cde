"""
Journal session: drives the view state against the entries API.

One session per page load. Every mutation is followed by ``resync()``, a full
refetch of the entry list; the cache is never patched in place.
"""
import logging
from contextlib import contextmanager
from datetime import date
from typing import Callable, List, Optional

from .api_client import EntryClient
from .records import EntryRecord
from .renderer import render_page
from .view_state import ClientViewState, View
from ..utils.errors import (BusyError, JournalError, MoodNotLoggedError, NoSelectionError,
                            PersistenceError, ValidationError)

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 2


class JournalSession:
    """User actions for one page load, with toast-style notifications."""

    def __init__(self, client: EntryClient, today: Optional[Callable[[], date]] = None):
        self.client = client
        self._today = today or date.today
        self.state = ClientViewState(today=self._today())
        self.notifications: List[str] = []
        self.is_busy = False

    # --- notifications ---

    def notify(self, message: str):
        logger.info(f"Notification: {message}")
        self.notifications.append(message)

    @property
    def last_notification(self) -> Optional[str]:
        return self.notifications[-1] if self.notifications else None

    @property
    def submit_enabled(self) -> bool:
        return not self.is_busy

    @contextmanager
    def _in_flight(self):
        """Disable submit/delete controls until the request finishes."""
        if self.is_busy:
            raise BusyError()
        self.is_busy = True
        try:
            yield
        finally:
            self.is_busy = False

    # --- synchronization ---

    def resync(self) -> bool:
        """Refetch every entry and replace the cache.

        Returns False (and notifies) when the server could not be reached;
        the previous cache is kept in that case.
        """
        try:
            entries = self.client.list_entries()
        except PersistenceError as e:
            self.notify(e.message)
            return False
        self.state.replace_entries(entries)
        return True

    def start(self) -> bool:
        """Initial load: fetch entries and focus today's date."""
        self.state.select_date(self._today().isoformat())
        return self.resync()

    # --- mood and navigation ---

    def move_mood(self, value) -> Optional[str]:
        try:
            return self.state.set_mood(value)
        except ValidationError as e:
            self.notify(e.message)
            return None

    def commit_mood(self):
        self.state.commit_mood()

    def navigate(self, view) -> bool:
        """Switch views. Returns False when the switch was refused."""
        if View(view) is View.HISTORY:
            return self.open_history()
        try:
            self.state.switch_view(view)
        except MoodNotLoggedError as e:
            self.notify(e.message)
            return False
        return True

    def back_to_log(self):
        self.state.back_to_log()

    def open_history(self, entry_id: Optional[str] = None) -> bool:
        """Refetch, then show history focused on ``entry_id`` or the newest entry."""
        if not self.resync():
            return False
        if self.state.open_history(entry_id) is None:
            self.notify("No history yet.")
        return True

    def select_date(self, date_key: str) -> Optional[List[EntryRecord]]:
        try:
            self.state.select_date(date_key)
        except ValidationError as e:
            self.notify(e.message)
            return None
        return self.state.entries_for_date(date_key)

    def select_entry(self, entry_id: str) -> Optional[EntryRecord]:
        try:
            return self.state.select_entry(entry_id)
        except NoSelectionError as e:
            self.notify(e.message)
            return None

    def change_month(self, delta: int):
        self.state.change_month(delta)

    # --- submit ---

    def submit_entry(self, raw_text: str) -> Optional[EntryRecord]:
        """Save a journal entry for the committed mood.

        Text shorter than two characters after trimming is refused without a
        request. On success the affirmation is shown and the entry's day is
        focused; ``acknowledge_affirmation`` then returns to the log view.
        """
        text = (raw_text or "").strip()
        if len(text) < MIN_TEXT_LENGTH:
            self.notify("Please write something first.")
            return None
        if not self.state.is_mood_logged:
            self.notify(MoodNotLoggedError.default_message)
            return None

        date_key = self._today().isoformat()
        try:
            with self._in_flight():
                entry = self.client.create_entry(
                    date=date_key,
                    mood_value=self.state.current_mood_value,
                    mood_label=self.state.mood_label,
                    text=text,
                )
        except JournalError as e:
            self.notify(e.message)
            return None

        self.state.select_date(entry.date)
        self.resync()
        self.state.show_affirmation(entry.affirmation)
        return entry

    def acknowledge_affirmation(self):
        self.state.complete_submission()

    # --- delete ---

    def request_delete(self) -> bool:
        """Open the delete confirmation after checking the selection still exists."""
        self.resync()
        try:
            self.state.request_delete()
        except NoSelectionError as e:
            self.notify(e.message)
            return False
        return True

    def cancel_delete(self):
        self.state.cancel_delete()

    def delete_selected(self) -> bool:
        """Delete the selected entry, refetch, and apply the reselection rule.

        A "not found" answer from the server counts as deleted: the refetch
        shows the entry is gone either way.
        """
        entry_id = self.state.selected_entry_id
        try:
            if not entry_id:
                raise NoSelectionError()
            with self._in_flight():
                self.client.delete_entry(entry_id)
        except JournalError as e:
            self.state.cancel_delete()
            self.notify(e.message)
            return False

        self.resync()
        self.state.reselect_after_delete(entry_id)
        self.notify("Entry deleted.")
        return True

    def render(self) -> str:
        return render_page(self.state)
