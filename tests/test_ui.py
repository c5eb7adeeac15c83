"""NiceGUI view tests."""

import pytest


class TestRosterUI:
    """Test UI components."""

    def test_roster_view_import(self):
        """RosterView should import successfully."""
        from clergy_roster.ui import RosterView
        assert RosterView is not None

    def test_main_app_import(self):
        """run_app should import successfully."""
        from clergy_roster.ui.main_app import register_pages, run_app
        assert callable(run_app)
        assert callable(register_pages)

    def test_table_columns(self):
        """Table should show status and row actions."""
        from clergy_roster.ui.roster_view import COLUMNS
        names = [column["name"] for column in COLUMNS]
        assert names[0] == "index"
        assert "status" in names
        assert names[-1] == "actions"

    def test_save_indicator_covers_every_status(self):
        from clergy_roster.roster.autosave import SaveStatus
        from clergy_roster.ui.clergy_dialog import SAVE_STATUS_TEXT
        assert set(SAVE_STATUS_TEXT) == set(SaveStatus)

    def test_view_builds_per_client_state(self, sqlite_store):
        """Each view gets its own session and subscription over the shared store."""
        from clergy_roster.config import Settings
        from clergy_roster.ui.roster_view import RosterView
        settings = Settings()
        first = RosterView(sqlite_store, settings)
        second = RosterView(sqlite_store, settings)
        assert first.store is second.store
        assert first.session is not second.session
        assert first.sync is not second.sync
        assert not first.session.logged_in
        assert first.editor.autosave_delay == settings.autosave.delay_seconds

    def test_view_survives_reconnect(self, sqlite_store):
        """Should stop the view only when the client is deleted, not on disconnect."""
        from clergy_roster.config import Settings
        from clergy_roster.ui.main_app import bind_to_client
        from clergy_roster.ui.roster_view import RosterView

        class RecordingClient:
            def __init__(self):
                self.handlers = {}

            def on_disconnect(self, handler):
                self.handlers["disconnect"] = handler

            def on_delete(self, handler):
                self.handlers["delete"] = handler

        client = RecordingClient()
        view = RosterView(sqlite_store, Settings())
        bind_to_client(client, view)
        assert set(client.handlers) == {"delete"}
        assert client.handlers["delete"] == view.stop


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
