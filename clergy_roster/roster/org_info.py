"""Organization info panel state - introduction, documents, social links."""

import logging
import time
from typing import Optional

from clergy_roster.roster.defaults import default_org_info
from clergy_roster.roster.notices import NoticeBoard
from clergy_roster.roster.session import AuthSession
from clergy_roster.store.errors import StoreError
from clergy_roster.store.gateway import RecordStoreGateway
from clergy_roster.store.models import (
    SOCIAL_KEYS,
    DocumentType,
    OrganizationInfo,
    OrgDocument,
)


logger = logging.getLogger(__name__)

DOCUMENT_FIELDS = ("title", "type", "size", "url")


class OrgInfoPanel:
    """Loads, edits and upserts the organization info singleton."""

    def __init__(self, store: RecordStoreGateway, session: AuthSession, notices: NoticeBoard):
        self.store = store
        self.session = session
        self.notices = notices
        self.info: OrganizationInfo = default_org_info()
        self.form: Optional[OrganizationInfo] = None
        self.loading = False
        self.saving = False

    @property
    def editing(self) -> bool:
        return self.form is not None

    async def load(self):
        """Fetch the stored document merged over the defaults."""
        if not self.store.configured:
            return
        self.loading = True
        try:
            stored = await self.store.get_settings()
        except StoreError as e:
            logger.error("Failed to load organization info: %s", e)
            return
        finally:
            self.loading = False
        if stored is None:
            self.info = default_org_info()
        else:
            self.info = OrganizationInfo.from_dict(stored.to_dict(), defaults=default_org_info())

    # =========================================================================
    # EDIT MODE
    # =========================================================================

    def start_edit(self) -> bool:
        if not self.session.logged_in or self.loading:
            return False
        self.form = self.info.copy()
        return True

    def cancel_edit(self):
        self.form = None

    def set_introduction(self, text: str):
        self._require_editing()
        self.form.introduction = text or ""

    def set_social_link(self, key: str, url: str):
        self._require_editing()
        if key not in SOCIAL_KEYS:
            raise KeyError(key)
        setattr(self.form.social_links, key, url or "")

    def add_document(self) -> OrgDocument:
        """Prepend a placeholder document."""
        self._require_editing()
        doc = OrgDocument(
            id=int(time.time() * 1000),
            title="New document",
            type=DocumentType.PDF,
            size="0 KB",
            url="#",
        )
        self.form.documents.insert(0, doc)
        return doc

    def remove_document(self, index: int):
        self._require_editing()
        del self.form.documents[index]

    def update_document(self, index: int, field_name: str, value: str):
        self._require_editing()
        if field_name not in DOCUMENT_FIELDS:
            raise AttributeError(f"Document field {field_name!r} does not exist")
        doc = self.form.documents[index]
        if field_name == "type":
            value = DocumentType(value)
        setattr(doc, field_name, value)

    def _require_editing(self):
        if self.form is None:
            raise RuntimeError("Organization info is not in edit mode")

    # =========================================================================
    # SAVE / CLOSE
    # =========================================================================

    async def save(self) -> bool:
        self._require_editing()
        if not self.store.configured:
            self.notices.error("Record store is not configured. Cannot save.")
            return False
        self.saving = True
        try:
            await self.store.set_settings(self.form)
        except StoreError as e:
            logger.error("Saving organization info failed: %s", e)
            self.notices.error("Error saving organization info.")
            return False
        finally:
            self.saving = False
        self.info = self.form
        self.form = None
        self.notices.success("Organization info updated.")
        return True

    def needs_close_confirmation(self) -> bool:
        """Closing while editing discards unsaved changes."""
        return self.editing

    def close(self):
        self.form = None
