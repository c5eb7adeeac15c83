"""Roster table view - live roster with filters, status chips and row actions."""

import logging

from nicegui import ui

from clergy_roster.config import Settings
from clergy_roster.roster.editor import ClergyEditor
from clergy_roster.roster.filters import (
    CATEGORY_FILTER_OPTIONS,
    FILTER_ALL,
    ROLE_FILTER_OPTIONS,
    RosterFilter,
)
from clergy_roster.roster.notices import Notice, NoticeBoard, NoticeKind
from clergy_roster.roster.org_info import OrgInfoPanel
from clergy_roster.roster.session import AuthSession
from clergy_roster.roster.sync import ConnectionStatus, RosterSync
from clergy_roster.roster.workflows import DeletionWorkflow, StatusChangeWorkflow
from clergy_roster.store.gateway import RecordStoreGateway
from clergy_roster.store.models import ClergyRecord, role_label, status_style
from clergy_roster.ui.clergy_dialog import ClergyDialog
from clergy_roster.ui.dialogs import AlertDialog, DeleteConfirmDialog, LoginDialog, StatusDialog
from clergy_roster.ui.org_info_dialog import OrgInfoDialog


logger = logging.getLogger(__name__)

COLUMNS = [
    {"name": "index", "label": "#", "field": "index", "sortable": False, "align": "center"},
    {"name": "avatar", "label": "", "field": "image_url", "sortable": False, "align": "center"},
    {"name": "name", "label": "Name", "field": "name", "sortable": True, "align": "left"},
    {"name": "location", "label": "Location", "field": "location", "sortable": True, "align": "left"},
    {"name": "role", "label": "Role", "field": "role", "sortable": True, "align": "left"},
    {"name": "ordination", "label": "Ordination", "field": "ordination", "sortable": False, "align": "left"},
    {"name": "tenure", "label": "Tenure", "field": "tenure", "sortable": False, "align": "left"},
    {"name": "status", "label": "Status", "field": "status_label", "sortable": True, "align": "center"},
    {"name": "actions", "label": "Actions", "field": "key", "sortable": False, "align": "center"},
]


class RosterView:
    """One browser client's roster console.

    Every client gets its own subscription, session and dialogs; only the
    store gateway is shared.
    """

    def __init__(self, store: RecordStoreGateway, settings: Settings):
        self.store = store
        self.settings = settings
        self.session = AuthSession(settings.auth)
        self.notices = NoticeBoard()
        self.sync = RosterSync(store)
        self.filter = RosterFilter()
        self.editor = ClergyEditor(
            store, self.session, self.notices, autosave_delay=settings.autosave.delay_seconds
        )
        self.status_workflow = StatusChangeWorkflow(store, self.session, self.notices)
        self.deletion = DeletionWorkflow(store, self.session, self.notices)
        self.org_panel = OrgInfoPanel(store, self.session, self.notices)
        self._row_records: dict[str, ClergyRecord] = {}
        self.table = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self):
        """Open the live subscription. Call from the page handler."""
        self.sync.on_change(lambda _sync: self._refresh())
        self.sync.start()

    def stop(self):
        self.editor.close()
        self.sync.stop()
        logger.debug("Roster view stopped")

    # =========================================================================
    # RENDER
    # =========================================================================

    def render(self):
        self.alert = AlertDialog()
        self.login_dialog = LoginDialog(self.session, on_success=self._on_auth_changed)
        self.status_dialog = StatusDialog(self.status_workflow, on_done=self._refresh)
        self.delete_dialog = DeleteConfirmDialog(self.deletion, on_done=self._refresh)
        self.clergy_dialog = ClergyDialog(self.editor, can_edit=lambda: self.session.logged_in)
        self.org_dialog = OrgInfoDialog(self.org_panel)
        self.notices.subscribe(self._show_notice)

        with ui.column().classes("w-full max-w-7xl mx-auto p-4"):
            with ui.row().classes("w-full justify-between items-center mb-4"):
                with ui.column().classes("gap-0"):
                    ui.label(f"✝️ {self.settings.ui.title}").classes("text-2xl font-bold")
                    self.connection_label = ui.label("Connecting...").classes("text-sm text-gray-500")
                with ui.row().classes("gap-2"):
                    ui.button("ℹ️ About", on_click=self.org_dialog.open).props("outline")
                    self.auth_button = ui.button("🔐 Sign in", on_click=self._toggle_auth).props("outline")

            with ui.row().classes("w-full gap-4 mb-4 items-center"):
                self.search_input = ui.input(
                    placeholder="🔍 Search by name or location...",
                    on_change=lambda e: self._set_filter("search", e.value or ""),
                ).props("clearable").classes("flex-1")
                self.role_select = ui.select(
                    ROLE_FILTER_OPTIONS, value=FILTER_ALL,
                    on_change=lambda e: self._set_filter("role", e.value or FILTER_ALL),
                ).classes("w-56")
                self.category_select = ui.select(
                    CATEGORY_FILTER_OPTIONS, value=FILTER_ALL,
                    on_change=lambda e: self._set_filter("category", e.value or FILTER_ALL),
                ).classes("w-56")
                ui.button("Clear", on_click=self._clear_filters).props("flat")
                self.add_button = ui.button(
                    "+ Add clergy", on_click=self.clergy_dialog.open_add
                ).props("color=primary")

            self.table = ui.table(
                columns=COLUMNS,
                rows=[],
                row_key="key",
                pagination={"rowsPerPage": 25},
            ).classes("w-full")
            self.table.props("loading")

            self.table.add_slot('body-cell-avatar', '''
                <q-td :props="props">
                    <a :href="props.row.profile_link" target="_blank">
                        <q-avatar size="40px"><img :src="props.row.image_url" /></q-avatar>
                    </a>
                </q-td>
            ''')
            self.table.add_slot('body-cell-status', '''
                <q-td :props="props">
                    <q-chip dense text-color="white" :color="props.row.status_color"
                            :clickable="props.row.can_edit"
                            @click="props.row.can_edit && $parent.$emit('status', props.row)">
                        {{ props.row.status_label }}
                    </q-chip>
                </q-td>
            ''')
            self.table.add_slot('body-cell-actions', '''
                <q-td :props="props">
                    <q-btn flat dense size="sm" icon="visibility" @click="$parent.$emit('view', props.row)" />
                    <q-btn v-if="props.row.can_edit" flat dense size="sm" icon="edit" @click="$parent.$emit('edit', props.row)" />
                    <q-btn v-if="props.row.can_edit" flat dense size="sm" icon="delete" color="negative" @click="$parent.$emit('delete', props.row)" />
                </q-td>
            ''')

            self.table.on('view', lambda e: self._with_record(e, self.clergy_dialog.open_view))
            self.table.on('edit', lambda e: self._with_record(e, self.clergy_dialog.open_edit))
            self.table.on('delete', lambda e: self._with_record(e, self.delete_dialog.request))
            self.table.on('status', lambda e: self._with_record(e, self.status_dialog.open))

            self.count_label = ui.label("").classes("text-sm text-gray-600 mt-2")

        self._on_auth_changed()

    def _refresh(self):
        """Push the filtered mirror into the table."""
        if self.table is None:
            return
        visible = self.filter.apply(self.sync.records)
        can_edit = self.session.logged_in
        self._row_records = {}
        rows = []
        for index, record in enumerate(visible, start=1):
            key = record.id or f"sample-{index}"
            self._row_records[key] = record
            style = status_style(record.status)
            rows.append({
                "key": key,
                "index": index,
                "image_url": record.image_url,
                "profile_link": record.profile_link or "#",
                "name": record.full_name,
                "location": record.current_location or "-",
                "role": role_label(record.role) or "-",
                "ordination": record.ordination_date or "-",
                "tenure": record.tenure or "-",
                "status_label": style.label,
                "status_color": style.color,
                "can_edit": can_edit,
            })
        self.table.rows = rows
        self.table.update()
        if self.sync.loading:
            self.table.props("loading")
        else:
            self.table.props(remove="loading")
        self.count_label.set_text(f"📊 Showing {len(visible)} of {len(self.sync.records)} clergy")
        self._update_connection()

    def _update_connection(self):
        if self.sync.loading:
            text, color = "Connecting...", "text-gray-500"
        elif self.sync.connection_status is ConnectionStatus.CONNECTED:
            text, color = "🟢 Connected", "text-green-600"
        else:
            text, color = "🔴 Offline - showing sample data", "text-red-600"
        self.connection_label.set_text(text)
        self.connection_label.classes(replace=f"text-sm {color}")

    # =========================================================================
    # HANDLERS
    # =========================================================================

    def _with_record(self, event, action):
        record = self._row_records.get(event.args.get("key"))
        if record is None:
            logger.debug("Row %s is no longer in the roster", event.args.get("key"))
            return
        try:
            action(record)
        except Exception as e:
            logger.exception("Row action failed for %s", record.id)
            ui.notify(f"❌ Error: {str(e)}", type="negative")

    def _set_filter(self, name: str, value: str):
        setattr(self.filter, name, value)
        self._refresh()

    def _clear_filters(self):
        self.filter.clear()
        self.search_input.value = ""
        self.role_select.value = FILTER_ALL
        self.category_select.value = FILTER_ALL
        self._refresh()

    def _toggle_auth(self):
        if self.session.logged_in:
            self.session.logout()
            self.editor.close()
            self._on_auth_changed()
            ui.notify("Signed out", type="info")
        else:
            self.login_dialog.open()

    def _on_auth_changed(self):
        self.auth_button.set_text("🚪 Sign out" if self.session.logged_in else "🔐 Sign in")
        self.add_button.set_visibility(self.session.logged_in)
        self._refresh()

    def _show_notice(self, notice: Notice):
        if notice.kind is NoticeKind.SUCCESS:
            ui.notify(f"✅ {notice.message}", type="positive")
        else:
            self.alert.show(notice)
