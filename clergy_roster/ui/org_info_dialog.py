"""Organization info dialog - introduction, documents and social links."""

import logging

from nicegui import ui

from clergy_roster.roster.org_info import OrgInfoPanel
from clergy_roster.store.models import SOCIAL_KEYS, DocumentType


logger = logging.getLogger(__name__)

SOCIAL_LABELS = {
    "facebook": "Facebook",
    "website": "Website",
    "youtube": "YouTube",
}


class OrgInfoDialog:
    """Read view for everyone, edit view for signed-in admins."""

    def __init__(self, panel: OrgInfoPanel):
        self.panel = panel
        with ui.dialog() as self.dialog, ui.card().classes("p-6 min-w-[700px] max-h-[85vh] overflow-auto"):
            with ui.row().classes("w-full justify-between items-center mb-2"):
                ui.label("⛪ About the organization").classes("text-2xl font-bold")
                ui.button(icon="close", on_click=self.request_close).props("flat round dense")
            self.body = ui.column().classes("w-full gap-3")
        self.dialog.props("persistent")

    async def open(self):
        self.dialog.open()
        self._render_loading()
        await self.panel.load()
        self._render()

    def request_close(self):
        if not self.panel.needs_close_confirmation():
            self._close()
            return
        with ui.dialog() as confirm, ui.card().classes("p-6"):
            ui.label("Discard unsaved changes?").classes("text-lg font-bold")
            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Keep editing", on_click=confirm.close).props("flat")
                ui.button(
                    "Discard", on_click=lambda: (confirm.close(), self._close())
                ).props("color=negative")
        confirm.open()

    def _close(self):
        self.panel.close()
        self.dialog.close()

    # =========================================================================
    # RENDER
    # =========================================================================

    def _render_loading(self):
        self.body.clear()
        with self.body:
            with ui.row().classes("w-full justify-center p-8"):
                ui.spinner(size="lg")

    def _render(self):
        self.body.clear()
        with self.body:
            if self.panel.editing:
                self._render_edit()
            else:
                self._render_view()

    def _render_view(self):
        info = self.panel.info
        ui.label(info.introduction).classes("text-sm whitespace-pre-wrap")

        ui.label("Documents").classes("font-bold text-lg mt-2")
        if not info.documents:
            ui.label("No documents.").classes("text-gray-500 text-sm")
        for doc in info.documents:
            with ui.row().classes("w-full items-center gap-3 p-2 bg-gray-50 rounded"):
                ui.icon("description").classes("text-2xl text-blue-600")
                with ui.column().classes("flex-1 gap-0"):
                    ui.link(doc.title, doc.url, new_tab=True).classes("font-medium")
                    ui.label(f"{doc.type.value} · {doc.size}").classes("text-xs text-gray-500")

        ui.label("Connect").classes("font-bold text-lg mt-2")
        with ui.row().classes("gap-4"):
            for key in SOCIAL_KEYS:
                ui.link(SOCIAL_LABELS[key], getattr(info.social_links, key), new_tab=True)

        if self.panel.session.logged_in:
            with ui.row().classes("w-full justify-end mt-4"):
                ui.button("✏️ Edit", on_click=self._start_edit).props("color=primary")

    def _render_edit(self):
        form = self.panel.form
        ui.textarea(
            "Introduction",
            value=form.introduction,
            on_change=lambda e: self.panel.set_introduction(e.value),
        ).props("outlined autogrow").classes("w-full")

        with ui.row().classes("w-full justify-between items-center mt-2"):
            ui.label("Documents").classes("font-bold text-lg")
            ui.button("+ Add document", on_click=self._add_document).props("flat dense color=primary")
        for index, doc in enumerate(form.documents):
            with ui.row().classes("w-full gap-2 items-center no-wrap"):
                ui.input(
                    "Title", value=doc.title,
                    on_change=lambda e, i=index: self.panel.update_document(i, "title", e.value),
                ).props("outlined dense").classes("flex-1")
                ui.select(
                    [t.value for t in DocumentType], value=doc.type.value, label="Type",
                    on_change=lambda e, i=index: self.panel.update_document(i, "type", e.value),
                ).props("outlined dense").classes("w-24")
                ui.input(
                    "Size", value=doc.size,
                    on_change=lambda e, i=index: self.panel.update_document(i, "size", e.value),
                ).props("outlined dense").classes("w-24")
                ui.input(
                    "URL", value=doc.url,
                    on_change=lambda e, i=index: self.panel.update_document(i, "url", e.value),
                ).props("outlined dense").classes("flex-1")
                ui.button(
                    icon="delete", on_click=lambda i=index: self._remove_document(i)
                ).props("flat dense color=negative")

        ui.label("Social links").classes("font-bold text-lg mt-2")
        for key in SOCIAL_KEYS:
            ui.input(
                SOCIAL_LABELS[key], value=getattr(form.social_links, key),
                on_change=lambda e, k=key: self.panel.set_social_link(k, e.value),
            ).props("outlined dense").classes("w-full")

        with ui.row().classes("w-full justify-end gap-2 mt-4"):
            ui.button("Cancel", on_click=self._cancel_edit).props("flat")
            self.save_button = ui.button("Save", on_click=self._save).props("color=primary")

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def _start_edit(self):
        if self.panel.start_edit():
            self._render()

    def _cancel_edit(self):
        self.panel.cancel_edit()
        self._render()

    def _add_document(self):
        self.panel.add_document()
        self._render()

    def _remove_document(self, index: int):
        self.panel.remove_document(index)
        self._render()

    async def _save(self):
        self.save_button.disable()
        try:
            saved = await self.panel.save()
        except Exception as e:
            logger.exception("Saving organization info failed")
            ui.notify(f"❌ Error: {str(e)}", type="negative")
            saved = False
        if saved:
            self._render()
        else:
            self.save_button.enable()
