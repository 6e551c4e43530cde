"""
Entry service: submission and deletion rules.
"""
from datetime import date

import pytest

from moodjournal.services.entry_service import EntryService
from moodjournal.utils.errors import NoSelectionError, PersistenceError, ValidationError


class RecordingProvider:
    def __init__(self, affirmation="You are enough."):
        self.affirmation = affirmation
        self.calls = []

    def generate(self, text, mood_label=None, mood_value=None):
        self.calls.append((text, mood_label, mood_value))
        return self.affirmation


class FailingStore:
    def create(self, data):
        raise PersistenceError("Failed to save entry. Please try again.")


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def recording_service(store, provider):
    return EntryService(store, provider)


class TestSubmit:

    def test_creates_entry_with_affirmation(self, recording_service, provider):
        entry = recording_service.submit("  Had a good day ", 75, "Content", "2024-01-15")

        assert entry["text"] == "Had a good day"
        assert entry["affirmation"] == "You are enough."
        assert provider.calls == [("Had a good day", "Content", 75)]
        assert recording_service.list_entries() == [entry]

    @pytest.mark.parametrize("text", ["", " ", "a", "  b  ", None])
    def test_short_text_rejected_before_any_call(self, recording_service, provider, text):
        with pytest.raises(ValidationError) as exc:
            recording_service.submit(text, 50, "Neutral", "2024-01-15")

        assert exc.value.message == "text too short"
        assert provider.calls == []
        assert recording_service.list_entries() == []

    def test_two_characters_accepted(self, recording_service):
        assert recording_service.submit("ok", 50, "Neutral", "2024-01-15")["text"] == "ok"

    def test_label_must_match_value(self, recording_service, provider):
        with pytest.raises(ValidationError):
            recording_service.submit("Had a good day", 81, "Content", "2024-01-15")
        assert provider.calls == []

    def test_missing_label_and_date_are_derived(self, recording_service):
        entry = recording_service.submit("Had a good day", 20)

        assert entry["moodLabel"] == "Burdened"
        assert entry["date"] == date.today().isoformat()

    def test_out_of_range_mood_rejected(self, recording_service):
        with pytest.raises(ValidationError):
            recording_service.submit("Had a good day", 150, None, "2024-01-15")

    def test_store_failure_propagates(self, provider):
        failing = EntryService(FailingStore(), provider)
        with pytest.raises(PersistenceError):
            failing.submit("Had a good day", 75, "Content", "2024-01-15")

    def test_default_provider_always_supplies_affirmation(self, service):
        entry = service.submit("Had a good day", 75, "Content", "2024-01-15")
        assert entry["affirmation"].strip()


class TestDelete:

    @pytest.mark.parametrize("entry_id", [None, ""])
    def test_requires_selection(self, recording_service, entry_id):
        with pytest.raises(NoSelectionError):
            recording_service.delete(entry_id)

    def test_delete_then_list(self, recording_service):
        entry = recording_service.submit("Had a good day", 75, "Content", "2024-01-15")

        assert recording_service.delete(entry["id"]) is True
        assert recording_service.list_entries() == []
        assert recording_service.delete(entry["id"]) is False
