"""Organization info panel tests."""

import asyncio

import pytest

from clergy_roster.roster.notices import NoticeKind
from clergy_roster.roster.org_info import OrgInfoPanel
from clergy_roster.store.errors import StoreError
from clergy_roster.store.models import DocumentType, OrganizationInfo


@pytest.fixture
def panel(fake_store, session, notices):
    return OrgInfoPanel(fake_store, session, notices)


class TestLoad:

    def test_defaults_when_nothing_stored(self, panel):
        asyncio.run(panel.load())
        assert len(panel.info.documents) == 4
        assert panel.info.social_links.facebook == "#"
        assert not panel.loading

    def test_stored_document_is_used(self, panel, fake_store):
        fake_store.settings_doc = OrganizationInfo(introduction="Cộng đồng AOS")
        asyncio.run(panel.load())
        assert panel.info.introduction == "Cộng đồng AOS"
        assert panel.info.documents == []

    def test_load_failure_keeps_defaults(self, panel, fake_store):
        fake_store.fail("get_settings", StoreError("offline"))
        asyncio.run(panel.load())
        assert len(panel.info.documents) == 4
        assert not panel.loading

    def test_unconfigured_store_is_not_queried(self, offline_store, session, notices):
        panel = OrgInfoPanel(offline_store, session, notices)
        asyncio.run(panel.load())
        assert offline_store.calls == []
        assert len(panel.info.documents) == 4


class TestEdit:

    def test_requires_sign_in(self, fake_store, signed_out, notices):
        panel = OrgInfoPanel(fake_store, signed_out, notices)
        assert not panel.start_edit()
        assert not panel.editing

    def test_edits_stay_in_form_until_saved(self, panel):
        panel.start_edit()
        panel.set_introduction("Mới")
        panel.set_social_link("youtube", "https://youtube.example/aos")
        assert panel.info.introduction != "Mới"
        assert panel.info.social_links.youtube == "#"

    def test_add_document_prepends_placeholder(self, panel):
        panel.start_edit()
        doc = panel.add_document()
        assert panel.form.documents[0] is doc
        assert doc.title == "New document"
        assert doc.type is DocumentType.PDF
        assert doc.size == "0 KB"
        assert len(panel.form.documents) == 5

    def test_update_and_remove_document(self, panel):
        panel.start_edit()
        panel.update_document(0, "type", "XLSX")
        panel.update_document(0, "title", "Lịch 2027")
        panel.remove_document(1)
        assert panel.form.documents[0].type is DocumentType.XLSX
        assert panel.form.documents[0].title == "Lịch 2027"
        assert len(panel.form.documents) == 3

    def test_unknown_social_key(self, panel):
        panel.start_edit()
        with pytest.raises(KeyError):
            panel.set_social_link("twitter", "x")

    def test_editing_required(self, panel):
        with pytest.raises(RuntimeError):
            panel.set_introduction("x")

    def test_close_confirmation_only_while_editing(self, panel):
        assert not panel.needs_close_confirmation()
        panel.start_edit()
        assert panel.needs_close_confirmation()
        panel.close()
        assert not panel.editing


class TestSave:

    def test_save_upserts_and_leaves_edit_mode(self, panel, fake_store, notices):
        panel.start_edit()
        panel.set_introduction("Giới thiệu mới")

        assert asyncio.run(panel.save())
        ((saved,),) = fake_store.calls_of("set_settings")
        assert saved.introduction == "Giới thiệu mới"
        assert panel.info.introduction == "Giới thiệu mới"
        assert not panel.editing
        assert notices.last.kind is NoticeKind.SUCCESS

    def test_failed_save_stays_in_edit_mode(self, panel, fake_store, notices):
        fake_store.fail("set_settings", StoreError("denied"))
        panel.start_edit()
        panel.set_introduction("x")

        assert not asyncio.run(panel.save())
        assert panel.editing
        assert not panel.saving
        assert notices.last.message == "Error saving organization info."

    def test_unconfigured_store_cannot_save(self, offline_store, session, notices):
        panel = OrgInfoPanel(offline_store, session, notices)
        panel.start_edit()
        assert not asyncio.run(panel.save())
        assert offline_store.calls == []
        assert notices.last.kind is NoticeKind.ERROR
