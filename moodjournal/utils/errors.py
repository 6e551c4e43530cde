"""
Error taxonomy shared by the server and the client.

Every error carries a user-facing ``message``; the view layer only ever
sees these types, never raw transport or database exceptions.
"""
from typing import Any, Dict, Optional


class JournalError(Exception):
    """Base class for all mood journal errors."""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(JournalError):
    """Input rejected before reaching the store (short text, bad mood value...)."""
    default_message = "Invalid entry."


class PersistenceError(JournalError):
    """The store failed to save, list or delete entries."""
    default_message = "Failed to reach the journal store. Please try again."


class ProviderError(JournalError):
    """Remote affirmation generation failed. Absorbed by the provider's fallbacks."""
    default_message = "Affirmation generation failed."


class NoSelectionError(JournalError):
    """An action needed a selected entry and none was selected."""
    default_message = "No entry selected."


class MoodNotLoggedError(JournalError):
    """The journal view was requested before a mood was committed."""
    default_message = "Please log your mood first."


class BusyError(JournalError):
    """A submit or delete is already in flight."""
    default_message = "Please wait for the current request to finish."
