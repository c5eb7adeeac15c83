"""Pytest fixtures for roster tests."""

import pytest

from clergy_roster.config import AuthSettings
from clergy_roster.roster.notices import NoticeBoard
from clergy_roster.roster.session import AuthSession
from clergy_roster.store.document_store import SQLiteDocumentStore
from clergy_roster.store.gateway import RecordStoreGateway, RosterSnapshot, SnapshotChannel
from clergy_roster.store.models import ClergyCategory, ClergyRecord, ClergyStatus


class FakeStore(RecordStoreGateway):
    """Recording gateway. ``fail(op, error)`` makes the next calls of ``op`` raise."""

    def __init__(self, configured: bool = True):
        self._configured = configured
        self.calls = []
        self.failures = {}
        self.settings_doc = None

    @property
    def configured(self) -> bool:
        return self._configured

    def fail(self, op: str, error: Exception):
        self.failures[op] = error

    def calls_of(self, op: str) -> list:
        return [call[1:] for call in self.calls if call[0] == op]

    def _record(self, op, *args):
        self.calls.append((op, *args))
        if op in self.failures:
            raise self.failures[op]

    def subscribe(self) -> SnapshotChannel:
        channel = SnapshotChannel()
        channel.publish(RosterSnapshot(()))
        return channel

    async def create(self, record):
        self._record("create", record)
        return "new-id"

    async def update(self, record_id, record):
        self._record("update", record_id, record)

    async def delete(self, record_id):
        self._record("delete", record_id)

    async def get_settings(self):
        self._record("get_settings")
        return self.settings_doc

    async def set_settings(self, info):
        self._record("set_settings", info)
        self.settings_doc = info.copy()


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLite document store in a temporary directory."""
    return SQLiteDocumentStore(db_path=str(tmp_path / "roster.db"))


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def offline_store():
    """Gateway with no backend configured."""
    return FakeStore(configured=False)


@pytest.fixture
def auth():
    return AuthSettings(username="admin", password="secret")


@pytest.fixture
def session(auth):
    """Signed-in admin session."""
    return AuthSession(auth, logged_in=True)


@pytest.fixture
def signed_out(auth):
    return AuthSession(auth)


@pytest.fixture
def notices():
    return NoticeBoard()


@pytest.fixture
def make_record():
    """Factory for roster records."""

    def _make(full_name="Phêrô Nguyễn Văn A", record_id="rec-1", **kwargs):
        kwargs.setdefault("role", "Linh Mục Chánh Xứ")
        kwargs.setdefault("current_location", "Giáo xứ Chính Tòa")
        kwargs.setdefault("category", ClergyCategory.PARISH)
        kwargs.setdefault("status", ClergyStatus.ACTIVE)
        return ClergyRecord(id=record_id, full_name=full_name, **kwargs)

    return _make
