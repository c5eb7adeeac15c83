"""Record editor session - view, edit (autosave) and add (manual submit)."""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Optional

from clergy_roster.roster.autosave import DEFAULT_DELAY_SECONDS, AutosaveSession, SaveStatus
from clergy_roster.roster.defaults import blank_record
from clergy_roster.roster.notices import NoticeBoard
from clergy_roster.roster.session import AuthSession
from clergy_roster.store.errors import StoreError
from clergy_roster.store.gateway import RecordStoreGateway
from clergy_roster.store.models import ClergyCategory, ClergyRecord, ClergyStatus, TimelineEvent


logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    ADD = "add"


EDITABLE_FIELDS = (
    "full_name",
    "image_url",
    "profile_link",
    "patron_saint",
    "birth_date",
    "role",
    "current_location",
    "ordination_date",
    "tenure",
    "category",
    "status",
)

TIMELINE_FIELDS = ("year", "description")


class ClergyEditor:
    """Owns a working copy of one record; never writes to the roster mirror.

    Edit mode saves in the background through :class:`AutosaveSession`.
    Add mode is a single blocking create triggered by :meth:`submit`.
    """

    def __init__(
        self,
        store: RecordStoreGateway,
        session: AuthSession,
        notices: NoticeBoard,
        autosave_delay: float = DEFAULT_DELAY_SECONDS,
    ):
        self.store = store
        self.session = session
        self.notices = notices
        self.autosave_delay = autosave_delay
        self.mode: Optional[EditorMode] = None
        self.form: Optional[ClergyRecord] = None
        self.is_open = False
        self.submitting = False
        self.autosave: Optional[AutosaveSession] = None
        self._status_listeners: list[Callable[[SaveStatus], None]] = []

    @property
    def save_status(self) -> SaveStatus:
        return self.autosave.status if self.autosave else SaveStatus.IDLE

    def on_save_status(self, callback: Callable[[SaveStatus], None]):
        """Listen to autosave status of every edit session."""
        self._status_listeners.append(callback)

    # =========================================================================
    # OPEN / CLOSE
    # =========================================================================

    def open_view(self, record: ClergyRecord):
        self.close()
        self.mode = EditorMode.VIEW
        self.form = record.copy()
        self.is_open = True

    def open_edit(self, record: ClergyRecord) -> bool:
        if not self.session.logged_in:
            return False
        self.close()
        self.mode = EditorMode.EDIT
        self.form = record.copy()
        self.autosave = AutosaveSession(self._write_update, delay=self.autosave_delay)
        for callback in self._status_listeners:
            self.autosave.on_status(callback)
        self.autosave.begin()
        self.autosave.track(self.form.copy())  # initial load, ignored
        self.is_open = True
        return True

    def open_add(self) -> bool:
        if not self.session.logged_in:
            return False
        self.close()
        self.mode = EditorMode.ADD
        self.form = blank_record()
        self.is_open = True
        return True

    def close(self):
        """Teardown: pending autosave timers are cancelled, not flushed."""
        if self.autosave is not None:
            self.autosave.close()
            self.autosave = None
        self.is_open = False
        self.submitting = False
        self.form = None

    # =========================================================================
    # FORM MUTATIONS
    # =========================================================================

    def set_field(self, name: str, value):
        self._require_editable()
        if name not in EDITABLE_FIELDS:
            raise AttributeError(f"Field {name!r} is not editable")
        if name == "category":
            value = ClergyCategory(value)
            if value is ClergyCategory.ALL:
                raise ValueError("ALL is a filter-only category")
        elif name == "status":
            value = ClergyStatus(value)
        else:
            value = value or ""
        setattr(self.form, name, value)
        self._changed()

    def add_timeline_event(self):
        self._require_editable()
        self.form.timeline.append(TimelineEvent())
        self._changed()

    def update_timeline_event(self, index: int, field_name: str, value: str):
        self._require_editable()
        if field_name not in TIMELINE_FIELDS:
            raise AttributeError(f"Timeline field {field_name!r} does not exist")
        setattr(self.form.timeline[index], field_name, value or "")
        self._changed()

    def remove_timeline_event(self, index: int):
        self._require_editable()
        del self.form.timeline[index]
        self._changed()

    def _require_editable(self):
        if not self.is_open or self.form is None:
            raise RuntimeError("Editor is not open")
        if self.mode is EditorMode.VIEW:
            raise PermissionError("Record is open read-only")

    def _changed(self):
        if self.mode is EditorMode.EDIT and self.autosave is not None:
            self.autosave.track(self.form.copy())

    # =========================================================================
    # SAVING
    # =========================================================================

    async def _write_update(self, snapshot: ClergyRecord):
        await self.store.update(snapshot.id, snapshot)

    async def submit(self) -> bool:
        """Create the record (add mode). Closes the editor on success.

        The editor may be closed while the create is in flight; the record
        is still reported as added and a later session is left alone.
        """
        if self.mode is not EditorMode.ADD or self.form is None:
            raise RuntimeError("submit() is only available in add mode")
        if not self.store.configured:
            self.notices.error("Record store is not configured. Cannot save.")
            return False
        if not self.form.full_name.strip():
            self.notices.error("Full name is required.")
            return False

        form = self.form
        self.submitting = True
        try:
            record_id = await self.store.create(form.copy())
        except StoreError as e:
            logger.warning("Create failed: %s", e)
            self.notices.error(f"Error: {e.message or 'Could not save'}")
            return False
        finally:
            if self.form is form:
                self.submitting = False

        logger.info("Added clergy member %s (%s)", form.full_name, record_id)
        self.notices.success("Clergy member added successfully.")
        if self.form is form:
            self.close()
        return True
