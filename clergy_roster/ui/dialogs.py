"""Modal dialogs: alert, login, status change and delete confirmation."""

import logging
from collections.abc import Callable

from nicegui import ui

from clergy_roster.roster.notices import AlertState, Notice, NoticeKind
from clergy_roster.roster.session import AuthSession
from clergy_roster.roster.workflows import DeletionWorkflow, StatusChangeWorkflow
from clergy_roster.store.models import STATUS_STYLES


logger = logging.getLogger(__name__)


ALERT_ICONS = {
    NoticeKind.SUCCESS: ("check_circle", "text-green-600"),
    NoticeKind.ERROR: ("cancel", "text-red-600"),
    NoticeKind.WARNING: ("error", "text-yellow-600"),
}


class AlertDialog:
    """Informational dialog bound to :class:`AlertState`."""

    def __init__(self):
        self.state = AlertState()
        with ui.dialog() as self.dialog, ui.card().classes("p-6 min-w-[360px] items-center"):
            self.icon = ui.icon("check_circle").classes("text-5xl")
            self.title = ui.label("").classes("text-xl font-bold")
            self.message = ui.label("").classes("text-gray-600 whitespace-pre-line text-center")
            ui.button("Close", on_click=self.close).props("color=primary").classes("w-full mt-4")
        self.dialog.on("hide", self.state.close)

    def show(self, notice: Notice):
        self.state.show(notice)
        name, color = ALERT_ICONS[notice.kind]
        self.icon.name = name
        self.icon.classes(replace=f"text-5xl {color}")
        self.title.set_text(notice.title)
        self.message.set_text(notice.message)
        self.dialog.open()

    def close(self):
        self.state.close()
        self.dialog.close()


class LoginDialog:
    """Static credential gate."""

    def __init__(self, session: AuthSession, on_success: Callable[[], None]):
        self.session = session
        self.on_success = on_success
        with ui.dialog() as self.dialog, ui.card().classes("p-6 min-w-[360px]"):
            ui.label("🔐 Admin sign-in").classes("text-xl font-bold mb-4")
            self.username = ui.input("Username", placeholder="Enter username").props("outlined dense").classes("w-full")
            self.password = ui.input(
                "Password", placeholder="Enter password", password=True, password_toggle_button=True
            ).props("outlined dense").classes("w-full")
            self.password.on("keydown.enter", self._login)
            self.error = ui.label("").classes("text-red-600 text-sm")
            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=self.dialog.close).props("flat")
                ui.button("Sign in", on_click=self._login).props("color=primary")

    def open(self):
        self.error.set_text("")
        self.dialog.open()

    def _login(self):
        if self.session.login(self.username.value, self.password.value):
            self.username.value = ""
            self.password.value = ""
            self.error.set_text("")
            self.dialog.close()
            self.on_success()
        else:
            self.error.set_text("Wrong username or password!")


class StatusDialog:
    """Radio selection over every status, applied as a full-record update."""

    def __init__(self, workflow: StatusChangeWorkflow, on_done: Callable[[], None]):
        self.workflow = workflow
        self.on_done = on_done
        with ui.dialog() as self.dialog, ui.card().classes("p-6 min-w-[400px]"):
            ui.label("Change status").classes("text-xl font-bold")
            self.name_label = ui.label("").classes("text-gray-600 mb-2")
            self.radio = ui.radio(
                {status.value: style.label for status, style in STATUS_STYLES.items()},
                on_change=lambda e: self.workflow.select(e.value) if e.value else None,
            ).classes("w-full")
            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=self._cancel).props("flat")
                ui.button("Update", on_click=self._confirm).props("color=primary")
        self.dialog.on("hide", self.workflow.cancel)

    def open(self, record) -> None:
        if not self.workflow.open(record):
            return
        self.name_label.set_text(record.full_name)
        self.radio.value = self.workflow.selection.value
        self.dialog.open()

    def _cancel(self):
        self.workflow.cancel()
        self.dialog.close()

    async def _confirm(self):
        try:
            await self.workflow.confirm()
        except Exception as e:
            logger.exception("Status change failed")
            ui.notify(f"❌ Error: {str(e)}", type="negative")
            self.workflow.cancel()
        if not self.workflow.is_open:
            self.dialog.close()
        self.on_done()


class DeleteConfirmDialog:
    """Yes/no dialog opened only after the deletion preconditions pass."""

    def __init__(self, workflow: DeletionWorkflow, on_done: Callable[[], None]):
        self.workflow = workflow
        self.on_done = on_done
        with ui.dialog() as self.dialog, ui.card().classes("p-6 min-w-[360px]"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("warning").classes("text-4xl text-red-600")
                ui.label("Confirm delete").classes("text-xl font-bold")
            self.message = ui.label("").classes("text-gray-600 whitespace-pre-line")
            with ui.row().classes("w-full justify-end gap-2 mt-6"):
                ui.button("Cancel", on_click=self._cancel).props("flat")
                ui.button("Delete", on_click=self._confirm).props("color=negative")
        self.dialog.on("hide", self.workflow.cancel)

    def request(self, record):
        if self.workflow.request(record):
            self.message.set_text(
                f"Delete {record.full_name}?\nThis action cannot be undone."
            )
            self.dialog.open()

    def _cancel(self):
        self.workflow.cancel()
        self.dialog.close()

    async def _confirm(self):
        # confirm() takes the pending id before the hide handler can clear it
        try:
            await self.workflow.confirm()
        except Exception as e:
            logger.exception("Delete failed")
            ui.notify(f"❌ Error deleting clergy member: {str(e)}", type="negative")
        self.dialog.close()
        self.on_done()
