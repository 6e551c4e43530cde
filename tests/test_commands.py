"""
Flask CLI commands.
"""
from .conftest import make_entry_payload


class TestCommands:

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=["init-db"])
        assert result.exit_code == 0
        assert "Database tables created." in result.output

    def test_clear_entries(self, app, http, store):
        http.post("/api/entries", json=make_entry_payload())
        http.post("/api/entries", json=make_entry_payload(text="another one"))

        result = app.test_cli_runner().invoke(args=["clear-entries", "--yes"])

        assert result.exit_code == 0
        assert "Deleted 2 entries." in result.output
        assert store.list_all() == []

    def test_clear_entries_aborts_without_confirmation(self, app, http, store):
        http.post("/api/entries", json=make_entry_payload())

        result = app.test_cli_runner().invoke(args=["clear-entries"], input="n\n")

        assert result.exit_code != 0
        assert len(store.list_all()) == 1
