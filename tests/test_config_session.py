"""Configuration, logging, auth session and notice tests."""

import pytest
from pydantic import ValidationError

from clergy_roster.config import AuthSettings, AutosaveSettings, Settings, StoreSettings
from clergy_roster.logging_config import ROOT_LOGGER, get_logger, setup_logging
from clergy_roster.roster.notices import AlertState, Confirmation, NoticeBoard, NoticeKind
from clergy_roster.roster.session import AuthSession, check_credentials


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.store.collection == "clergy"
        assert settings.store.org_info_id == "aos_info"
        assert settings.autosave.delay_seconds == 1.5

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ADMIN_USERNAME", "rector")
        monkeypatch.setenv("STORE_BACKEND", "none")
        monkeypatch.setenv("AUTOSAVE_DELAY_SECONDS", "0.5")
        assert AuthSettings().username == "rector"
        assert StoreSettings().backend == "none"
        assert AutosaveSettings().delay_seconds == 0.5

    def test_delay_must_be_positive(self):
        with pytest.raises(ValidationError):
            AutosaveSettings(delay_seconds=0)

    def test_ensure_dirs(self, tmp_path):
        settings = StoreSettings(db_path=str(tmp_path / "a" / "b" / "roster.db"))
        settings.ensure_dirs()
        assert (tmp_path / "a" / "b").is_dir()


class TestLogging:

    def test_setup_is_idempotent(self):
        first = setup_logging("DEBUG")
        second = setup_logging("INFO")
        assert first is second
        assert len(first.handlers) == 1

    def test_module_loggers_share_root(self):
        assert get_logger("roster.sync").name == f"{ROOT_LOGGER}.roster.sync"
        assert get_logger("clergy_roster.store").name == "clergy_roster.store"


class TestAuthSession:

    def test_credentials(self, auth):
        assert check_credentials("admin", "secret", auth)
        assert not check_credentials("admin", "wrong", auth)
        assert not check_credentials("", "", auth)

    def test_login_logout(self, auth):
        session = AuthSession(auth)
        assert not session.login("admin", "nope")
        assert not session.logged_in
        assert session.login("admin", "secret")
        assert session.logged_in
        session.logout()
        assert not session.logged_in


class TestNotices:

    def test_board_fans_out(self):
        board = NoticeBoard()
        received = []
        board.subscribe(received.append)
        board.success("ok")
        board.error("bad")
        assert [n.kind for n in received] == [NoticeKind.SUCCESS, NoticeKind.ERROR]
        assert board.last.message == "bad"
        assert board.last.title == "Error"

    def test_alert_state(self):
        alert = AlertState()
        alert.show(NoticeBoard().warning("careful"))
        assert alert.open
        alert.close()
        assert not alert.open
        assert alert.notice.message == "careful"

    def test_confirmation_take_clears(self):
        confirmation = Confirmation()
        assert not confirmation.open
        confirmation.request("abc")
        assert confirmation.open
        assert confirmation.take() == "abc"
        assert confirmation.take() is None
