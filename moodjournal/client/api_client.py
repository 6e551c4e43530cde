"""
HTTP client for the entries API.

Every transport problem is converted to the journal error taxonomy here, so
callers above this module never handle ``requests`` exceptions.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from .records import EntryRecord
from ..utils.affirmation_service import AffirmationProvider
from ..utils.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class EntryClient:
    """Talks to the ``/api`` routes of a mood journal server."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 fallback_provider: Optional[AffirmationProvider] = None):
        """Initialize the client.

        Args:
            base_url: Server root, e.g. ``http://localhost:5000``.
            session: Optional requests session to reuse.
            timeout: Per-request timeout in seconds.
            fallback_provider: Local provider used when the affirmation
                endpoint cannot be reached.
        """
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.fallback_provider = fallback_provider or AffirmationProvider.local()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    def _request(self, method: str, path: str, failure: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise PersistenceError(failure) from e

    @staticmethod
    def _json(response: requests.Response, failure: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {response.url} is not JSON")
            raise PersistenceError(failure) from e

    @staticmethod
    def _error_message(response: requests.Response, default: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return default

    def list_entries(self) -> List[EntryRecord]:
        """Fetch every entry, newest first."""
        failure = "Error loading data."
        response = self._request("GET", "/entries", failure)
        if not response.ok:
            logger.error(f"Loading entries failed with status {response.status_code}")
            raise PersistenceError(failure)
        body = self._json(response, failure)
        if not isinstance(body, list):
            raise PersistenceError(failure)
        return [EntryRecord.from_dict(item) for item in body]

    def get_entry(self, entry_id: str) -> Optional[EntryRecord]:
        failure = "Error loading entry."
        response = self._request("GET", f"/entries/{entry_id}", failure)
        if response.status_code == 404:
            return None
        if not response.ok:
            raise PersistenceError(failure)
        return EntryRecord.from_dict(self._json(response, failure))

    def create_entry(self, date: str, mood_value: int, mood_label: str, text: str) -> EntryRecord:
        """Create an entry; the server generates its affirmation.

        Raises:
            ValidationError: the server rejected the entry (400).
            PersistenceError: the server could not be reached or failed to save.
        """
        failure = "Failed to save entry. Please try again."
        payload: Dict[str, Any] = {
            "date": date,
            "moodValue": mood_value,
            "moodLabel": mood_label,
            "text": text,
        }
        response = self._request("POST", "/entries", failure, json=payload)
        if response.status_code == 400:
            raise ValidationError(self._error_message(response, "Entry was rejected."))
        if not response.ok:
            logger.error(f"Saving entry failed with status {response.status_code}")
            raise PersistenceError(failure)

        body = self._json(response, failure)
        if not isinstance(body, dict) or not isinstance(body.get("entry"), dict):
            raise PersistenceError(failure)
        return EntryRecord.from_dict(body["entry"])

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry.

        Returns:
            True if deleted, False if the server did not know the id.
        """
        failure = "Failed to delete entry. Please try again."
        response = self._request("DELETE", f"/entries/{entry_id}", failure)
        if response.status_code == 404:
            logger.info(f"Entry {entry_id} was already gone")
            return False
        if not response.ok:
            logger.error(f"Deleting entry failed with status {response.status_code}")
            raise PersistenceError(failure)
        return True

    def generate_affirmation(self, text: str, mood_label: Optional[str] = None,
                             mood_value: Optional[int] = None) -> str:
        """Ask the server for an affirmation; fall back locally. Never raises."""
        payload: Dict[str, Any] = {"text": text}
        if mood_label is not None:
            payload["moodLabel"] = mood_label
        if mood_value is not None:
            payload["moodValue"] = mood_value

        try:
            response = self._request("POST", "/generate-affirmation", "Affirmation unavailable.", json=payload)
            body = self._json(response, "Affirmation unavailable.") if response.ok else None
        except PersistenceError:
            body = None

        affirmation = body.get("affirmation") if isinstance(body, dict) else None
        if isinstance(affirmation, str) and affirmation.strip():
            return affirmation.strip()

        logger.warning("Affirmation endpoint unavailable, using local affirmation")
        return self.fallback_provider.generate(text, mood_label, mood_value)
