"""Status change and deletion workflows."""

import logging
from typing import Optional

from clergy_roster.roster.notices import Confirmation, NoticeBoard
from clergy_roster.roster.session import AuthSession
from clergy_roster.store.errors import PermissionDeniedError, StoreError
from clergy_roster.store.gateway import RecordStoreGateway
from clergy_roster.store.models import ClergyRecord, ClergyStatus, parse_status


logger = logging.getLogger(__name__)

SAMPLE_STATUS_MESSAGE = "Cannot change the status of sample data."
SAMPLE_DELETE_MESSAGE = "This is sample data and cannot be deleted.\nIt is only shown temporarily."
NOT_CONNECTED_MESSAGE = "Not connected to the record store.\nCheck the store configuration."
PERMISSION_DENIED_MESSAGE = "You do not have permission to delete this record.\nCheck the store access rules."


class StatusChangeWorkflow:
    """Modal status change, gated on the auth session."""

    def __init__(self, store: RecordStoreGateway, session: AuthSession, notices: NoticeBoard):
        self.store = store
        self.session = session
        self.notices = notices
        self.target: Optional[ClergyRecord] = None
        self.selection: Optional[ClergyStatus] = None

    @property
    def is_open(self) -> bool:
        return self.target is not None

    def open(self, record: ClergyRecord) -> bool:
        """Capture the record and its current status. No-op when signed out."""
        if not self.session.logged_in:
            return False
        self.target = record.copy()
        self.selection = parse_status(record.status)
        return True

    def select(self, status):
        self.selection = ClergyStatus(status)

    async def confirm(self) -> bool:
        """Replace the whole record with the new status applied."""
        if self.target is None:
            return False
        if not self.target.is_persisted:
            self.notices.error(SAMPLE_STATUS_MESSAGE)
            self.cancel()
            return False

        updated = self.target.copy()
        updated.status = self.selection
        try:
            await self.store.update(updated.id, updated)
        except StoreError as e:
            logger.warning("Status update failed for %s: %s", updated.id, e)
            self.notices.error(f"Error updating status: {e.message}")
            return False

        logger.info("Status of %s set to %s", updated.id, updated.status.value)
        self.notices.success("Status updated successfully.")
        self.cancel()
        return True

    def cancel(self):
        self.target = None
        self.selection = None


class DeletionWorkflow:
    """Two client-side checks, then a confirmation, then the delete."""

    def __init__(self, store: RecordStoreGateway, session: AuthSession, notices: NoticeBoard):
        self.store = store
        self.session = session
        self.notices = notices
        self.confirmation: Confirmation[str] = Confirmation()

    @property
    def pending_id(self) -> Optional[str]:
        return self.confirmation.pending

    def request(self, record: ClergyRecord) -> bool:
        """Open the confirmation if the record can be deleted."""
        if not self.session.logged_in:
            return False
        if not record.is_persisted:
            self.notices.warning(SAMPLE_DELETE_MESSAGE)
            return False
        if not self.store.configured:
            self.notices.error(NOT_CONNECTED_MESSAGE)
            return False
        self.confirmation.request(record.id)
        return True

    async def confirm(self) -> bool:
        record_id = self.confirmation.take()
        if not record_id:
            return False
        try:
            await self.store.delete(record_id)
        except PermissionDeniedError as e:
            logger.warning("Delete of %s refused: %s", record_id, e)
            self.notices.error(PERMISSION_DENIED_MESSAGE)
            return False
        except StoreError as e:
            logger.warning("Delete of %s failed: %s", record_id, e)
            self.notices.error(f"Delete failed: {e.message or 'Unknown error'}")
            return False

        logger.info("Deleted clergy member %s", record_id)
        self.notices.success("Clergy member deleted.")
        return True

    def cancel(self):
        self.confirmation.cancel()
