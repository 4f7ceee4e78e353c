from __future__ import annotations

from typing import Any, ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Input, Label, Static

from billbook.services.exceptions import BillingError


class CatalogScreen(ModalScreen):
    """Two-phase modal shared by customers and items: list/search → add form.

    Subclasses name the form fields and columns and implement the three
    hooks at the bottom.
    """

    HEADER: ClassVar[str] = ""
    COLUMNS: ClassVar[tuple[str, ...]] = ()
    # (field name, label, placeholder) for every Input of the add form
    INPUT_FIELDS: ClassVar[tuple[tuple[str, str, str], ...]] = ()

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._phase = "list"
        self._confirm_delete: int | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static(self.HEADER, id="header-bar")
                yield Button("✕", id="btn-modal-close")

            # Phase 1: List
            with Container(id="list-container"):
                yield Input(placeholder="Search…", id="search-input")
                yield DataTable(id="records-table", cursor_type="row")
                with Horizontal(classes="button-bar"):
                    yield Button("✕ Close", id="btn-list-close", variant="error")
                    yield Button(
                        "✖ Remove",
                        id="btn-remove",
                        variant="warning",
                        tooltip="Remove the selected record (press twice)",
                    )
                    yield Button("▶ New", id="btn-new-record", variant="primary")

            # Phase 2: Form
            with Container(id="form-container"):
                for name, label, placeholder in self.INPUT_FIELDS:
                    yield Label(label, classes="form-label")
                    yield Input(placeholder=placeholder, id=f"field-{name}")
                yield Label("", id="form-error-label")
                with Horizontal(classes="button-bar"):
                    yield Button("← Back", id="btn-form-back", variant="error")
                    yield Button("▶ Save", id="btn-save-record", variant="success")

    def on_mount(self) -> None:
        self._show_phase("list")
        self._load_records()
        self.query_one("#records-table", DataTable).focus()

    def _show_phase(self, phase: str) -> None:
        self._phase = phase
        self.query_one("#list-container").display = phase == "list"
        self.query_one("#form-container").display = phase == "form"

    def _load_records(self) -> None:
        query = self.query_one("#search-input", Input).value.strip()
        catalog = self._catalog()
        records = catalog.search(query) if query else catalog.list_all()

        table = self.query_one("#records-table", DataTable)
        table.clear(columns=True)
        table.add_columns(*self.COLUMNS)
        for record in records:
            table.add_row(*self._row(record), key=str(record.id))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self._load_records()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-list-close" | "btn-modal-close":
                self.app.pop_screen()
            case "btn-new-record":
                self._open_new_form()
            case "btn-form-back":
                self._show_phase("list")
            case "btn-save-record":
                self._do_save()
            case "btn-remove":
                self._remove_selected()

    def _open_new_form(self) -> None:
        self._confirm_delete = None
        for name, _, _ in self.INPUT_FIELDS:
            self.query_one(f"#field-{name}", Input).value = ""
        self.query_one("#form-error-label", Label).update("")
        self._show_phase("form")
        first = self.INPUT_FIELDS[0][0]
        self.query_one(f"#field-{first}", Input).focus()

    def _read_form_values(self) -> dict[str, str]:
        return {
            name: self.query_one(f"#field-{name}", Input).value.strip()
            for name, _, _ in self.INPUT_FIELDS
        }

    def _do_save(self) -> None:
        error_label = self.query_one("#form-error-label", Label)
        error_label.update("")
        try:
            record = self._add(self._read_form_values())
        except ValueError as e:
            error_label.update(str(e))
            return
        except BillingError as e:
            error_label.update(f"Error: {e}")
            return
        self.notify(f"Saved with ID {record.id}", timeout=3)
        self._show_phase("list")
        self._load_records()

    # --- Remove ---

    def _remove_selected(self) -> None:
        table = self.query_one("#records-table", DataTable)
        if table.row_count == 0:
            self.notify("Nothing selected", severity="warning", timeout=3)
            return
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        self._request_remove(int(str(row_key.value)))

    def _request_remove(self, record_id: int) -> None:
        """First press = ask confirmation; second press = remove."""
        if self._confirm_delete != record_id:
            self._confirm_delete = record_id
            self.notify(
                f"Press Remove again to delete ID {record_id}",
                severity="warning",
                timeout=4,
            )
            return
        self._confirm_delete = None
        try:
            removed = self._catalog().remove(record_id)
        except BillingError as e:
            self.notify(f"Error removing: {e}", severity="error", timeout=5)
            return
        if removed:
            self.notify(f"ID {record_id} removed", timeout=3)
        else:
            self.notify(f"ID {record_id} not found", severity="warning", timeout=3)
        self._load_records()

    def action_go_back(self) -> None:
        self._confirm_delete = None
        if self._phase == "form":
            self._show_phase("list")
        else:
            self.app.pop_screen()

    # --- Hooks ---

    def _catalog(self) -> Any:
        raise NotImplementedError

    def _row(self, record: Any) -> tuple[str, ...]:
        raise NotImplementedError

    def _add(self, values: dict[str, str]) -> Any:
        """Validate form values and add the record; raise ValueError on bad input."""
        raise NotImplementedError
