"""Clergy record dialog - view, edit with autosave, add with manual submit."""

import logging
from collections.abc import Callable

from nicegui import ui

from clergy_roster.roster.autosave import SaveStatus
from clergy_roster.roster.editor import ClergyEditor, EditorMode
from clergy_roster.store.models import (
    CATEGORY_LABELS,
    ROLE_OPTIONS,
    ClergyRecord,
    role_label,
    status_style,
)


logger = logging.getLogger(__name__)


SAVE_STATUS_TEXT = {
    SaveStatus.IDLE: ("", "text-gray-400"),
    SaveStatus.SAVING: ("⏳ Saving...", "text-blue-600"),
    SaveStatus.SAVED: ("✅ Saved", "text-green-600"),
    SaveStatus.ERROR: ("❌ Save failed", "text-red-600"),
}


class ClergyDialog:
    """Renders a :class:`ClergyEditor` inside a dialog.

    Each open builds a fresh dialog the same way the table actions do;
    closing the dialog always tears the editor session down.
    """

    def __init__(self, editor: ClergyEditor, can_edit: Callable[[], bool]):
        self.editor = editor
        self.can_edit = can_edit
        self.dialog = None
        self.status_label = None
        self.timeline_box = None
        self.submit_button = None
        self.editor.on_save_status(self._show_save_status)

    # =========================================================================
    # OPEN
    # =========================================================================

    def open_view(self, record: ClergyRecord):
        self.editor.open_view(record)
        self._build()

    def open_edit(self, record: ClergyRecord):
        if self.editor.open_edit(record):
            self._build()

    def open_add(self):
        if self.editor.open_add():
            self._build()

    def _close(self):
        self.editor.close()
        if self.dialog is not None:
            self.dialog.close()

    def _build(self):
        form = self.editor.form
        mode = self.editor.mode
        read_only = mode is EditorMode.VIEW

        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[700px] max-h-[85vh] overflow-auto"):
            self.dialog = dialog
            with ui.row().classes("w-full justify-between items-center mb-4"):
                ui.label(self._title(mode, form)).classes("text-2xl font-bold")
                self.status_label = ui.label("").classes("text-sm")
                if mode is EditorMode.EDIT:
                    self._show_save_status(self.editor.save_status)

            with ui.row().classes("w-full gap-6 no-wrap"):
                with ui.column().classes("items-center gap-2"):
                    ui.image(form.image_url).classes("w-40 h-40 rounded-full object-cover")
                    style = status_style(form.status)
                    ui.badge(style.label, color=style.color).classes("px-3 py-1")
                if read_only:
                    self._render_details(form)
                else:
                    self._render_form(form)

            ui.separator().classes("my-4")
            ui.label("Timeline").classes("font-bold text-lg")
            self.timeline_box = ui.column().classes("w-full gap-2")
            self._render_timeline()
            if not read_only:
                ui.button("+ Add event", on_click=self._add_event).props("flat dense color=primary")

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Close", on_click=self._close).props("flat")
                if read_only and self.can_edit():
                    ui.button("Edit", on_click=lambda: self._switch_to_edit(form)).props("color=primary")
                if mode is EditorMode.ADD:
                    self.submit_button = ui.button("Save", on_click=self._submit).props("color=primary")

        def on_hide():
            # a replaced dialog must not tear down the session that followed it
            if self.dialog is dialog:
                self.editor.close()

        dialog.on("hide", on_hide)
        dialog.open()

    @staticmethod
    def _title(mode: EditorMode, form: ClergyRecord) -> str:
        if mode is EditorMode.ADD:
            return "➕ Add clergy member"
        if mode is EditorMode.EDIT:
            return f"✏️ Edit {form.full_name}"
        return f"👤 {form.full_name}"

    def _switch_to_edit(self, form: ClergyRecord):
        self.dialog.close()
        self.open_edit(form)

    # =========================================================================
    # VIEW / FORM
    # =========================================================================

    def _render_details(self, form: ClergyRecord):
        with ui.grid(columns=2).classes("flex-1 gap-3"):
            self._info_field("Patron saint", form.patron_saint)
            self._info_field("Role", role_label(form.role))
            self._info_field("Birth date", form.birth_date)
            self._info_field("Ordination date", form.ordination_date)
            self._info_field("Current location", form.current_location)
            self._info_field("Tenure", form.tenure)
            self._info_field("Category", CATEGORY_LABELS.get(form.category, form.category.value))
            if form.profile_link:
                with ui.column().classes("gap-1"):
                    ui.label("Profile").classes("text-xs font-bold text-gray-500 uppercase")
                    ui.link("Open profile", form.profile_link, new_tab=True).classes("text-sm")

    def _info_field(self, label: str, value: str):
        with ui.column().classes("gap-1"):
            ui.label(label).classes("text-xs font-bold text-gray-500 uppercase")
            ui.label(value or "-").classes("text-sm")

    def _render_form(self, form: ClergyRecord):
        set_field = self.editor.set_field
        roles = {role: role_label(role) for role in ROLE_OPTIONS}
        if form.role and form.role not in roles:
            roles = {form.role: role_label(form.role), **roles}

        def field(label, name, **kwargs):
            return ui.input(
                label,
                value=getattr(form, name),
                on_change=lambda e: set_field(name, e.value),
                **kwargs,
            ).props("outlined dense")

        with ui.column().classes("flex-1 gap-2"):
            field("Full name", "full_name").classes("w-full")
            with ui.row().classes("w-full gap-2"):
                field("Patron saint", "patron_saint").classes("flex-1")
                ui.select(
                    label="Role",
                    options=roles,
                    value=form.role or None,
                    on_change=lambda e: set_field("role", e.value),
                ).props("outlined dense").classes("flex-1")
            with ui.row().classes("w-full gap-2"):
                field("Birth date", "birth_date").classes("flex-1")
                field("Ordination date", "ordination_date").classes("flex-1")
            with ui.row().classes("w-full gap-2"):
                field("Current location", "current_location").classes("flex-1")
                field("Tenure", "tenure").classes("flex-1")
            ui.select(
                label="Category",
                options={category.value: label for category, label in CATEGORY_LABELS.items()},
                value=form.category.value,
                on_change=lambda e: set_field("category", e.value),
            ).props("outlined dense").classes("w-full")
            field("Image URL", "image_url").classes("w-full")
            field("Profile link", "profile_link").classes("w-full")

    # =========================================================================
    # TIMELINE
    # =========================================================================

    def _render_timeline(self):
        self.timeline_box.clear()
        form = self.editor.form
        if form is None:
            return
        read_only = self.editor.mode is EditorMode.VIEW
        with self.timeline_box:
            if not form.timeline:
                ui.label("No events yet.").classes("text-gray-500 text-sm")
            for index, event in enumerate(form.timeline):
                if read_only:
                    with ui.row().classes("gap-4"):
                        ui.label(event.year or "-").classes("font-bold w-16")
                        ui.label(event.description).classes("text-sm")
                    continue
                with ui.row().classes("w-full gap-2 items-center no-wrap"):
                    ui.input(
                        "Year",
                        value=event.year,
                        on_change=lambda e, i=index: self.editor.update_timeline_event(i, "year", e.value),
                    ).props("outlined dense").classes("w-24")
                    ui.input(
                        "Description",
                        value=event.description,
                        on_change=lambda e, i=index: self.editor.update_timeline_event(i, "description", e.value),
                    ).props("outlined dense").classes("flex-1")
                    ui.button(
                        icon="delete", on_click=lambda i=index: self._remove_event(i)
                    ).props("flat dense color=negative")

    def _add_event(self):
        self.editor.add_timeline_event()
        self._render_timeline()

    def _remove_event(self, index: int):
        self.editor.remove_timeline_event(index)
        self._render_timeline()

    # =========================================================================
    # SAVE
    # =========================================================================

    def _show_save_status(self, status: SaveStatus):
        if self.status_label is None or self.editor.mode is not EditorMode.EDIT:
            return
        text, color = SAVE_STATUS_TEXT[status]
        self.status_label.set_text(text)
        self.status_label.classes(replace=f"text-sm {color}")

    async def _submit(self):
        # the dialog may be closed or replaced while the create runs
        dialog, button = self.dialog, self.submit_button
        button.disable()
        try:
            created = await self.editor.submit()
        except Exception as e:
            logger.exception("Adding clergy member failed")
            ui.notify(f"❌ Error adding clergy member: {str(e)}", type="negative")
            created = False
        finally:
            button.enable()
        if created:
            dialog.close()
