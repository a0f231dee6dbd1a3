"""Interactive browser for a DCN register dump."""

from __future__ import annotations

from collections.abc import Iterable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header

from dcnregdump.dump import RegisterDumper
from dcnregdump.locator import DefinitionSource
from dcnregdump.sections import DEFAULT_SECTIONS, SectionSpec

from .detail import DetailPanel
from .state import AppState
from .tree import RegisterTree
from .types import ValueFormat


class DcnRegDumpApp(App):
    """Read-only register browser."""

    CSS = """
    #main-container {
        height: 1fr;
    }
    #reg-tree {
        width: 1fr;
        min-width: 36;
        max-width: 45%;
        border-right: solid $accent;
    }
    #detail-panel {
        width: 2fr;
    }
    #bit-diagram, #field-table, #section-detail, #root-detail {
        padding: 1;
    }
    """

    BINDINGS = [
        Binding('r', 'read', 'Re-read', show=True),
        Binding('f', 'format', 'Format', show=True),
        Binding('q', 'quit', 'Quit', show=True),
    ]

    TITLE = 'dcnregdump'

    def __init__(
        self,
        dumper: RegisterDumper,
        sections: Iterable[SectionSpec] = DEFAULT_SECTIONS,
        source: DefinitionSource | None = None,
    ) -> None:
        super().__init__()
        self.dumper = dumper
        self.sections = tuple(sections)

        source_str = ''
        if source is not None:
            source_str = f'DCN {source.version} ({source.format.value}: {source.offset_path})'
        self.state = AppState(source_str)

        self._selected_section: SectionSpec | None = None
        self._selected_reg: str | None = None
        self._selected_field: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id='main-container'):
            yield RegisterTree()
            yield DetailPanel(id='detail-panel')
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = f'{self.state.source_str}  |  base: 0x{self.dumper.device_base:X}'
        self.state.sections = list(self.dumper.dump(self.sections))
        self.query_one(RegisterTree).rebuild(self.state)
        self._refresh_detail()

    def _refresh_detail(self) -> None:
        panel = self.query_one(DetailPanel)

        if self._selected_reg and self._selected_section:
            report = self.state.get_report(self._selected_section, self._selected_reg)
            if report is not None:
                panel.set_register(report, self.state.value_format, self._selected_field)
                return

        if self._selected_section:
            sreport = self.state.find_section(self._selected_section)
            if sreport is not None:
                panel.set_section(sreport)
                return

        panel.set_root(self.state)

    def _read_register(self, section: SectionSpec, reg_name: str) -> None:
        self.state.set_report(section, self.dumper.read_register(reg_name))

    # --- Event handlers ---

    def on_register_tree_section_selected(self, event: RegisterTree.SectionSelected) -> None:
        self._selected_section = event.section
        self._selected_reg = None
        self._selected_field = None
        self._refresh_detail()

    def on_register_tree_register_selected(self, event: RegisterTree.RegisterSelected) -> None:
        self._selected_section = event.section
        self._selected_reg = event.reg_name
        self._selected_field = None
        self._refresh_detail()

    def on_register_tree_field_selected(self, event: RegisterTree.FieldSelected) -> None:
        self._selected_section = event.section
        self._selected_reg = event.reg_name
        self._selected_field = event.label
        self._refresh_detail()

    def on_register_tree_nothing_selected(self, event: RegisterTree.NothingSelected) -> None:
        self._selected_section = None
        self._selected_reg = None
        self._selected_field = None
        self._refresh_detail()

    # --- Actions ---

    def action_read(self) -> None:
        section = self._selected_section

        if section and self._selected_reg:
            self._read_register(section, self._selected_reg)
            changed = {(section.title, self._selected_reg)}
        elif section:
            sreport = self.state.find_section(section)
            if sreport is None:
                return
            changed = set()
            for r in list(sreport.registers):
                self._read_register(section, r.name)
                changed.add((section.title, r.name))
        else:
            self.notify('Select a register or section first', severity='warning')
            return

        self.query_one(RegisterTree).update_values(self.state, changed)
        self._refresh_detail()

    def action_format(self) -> None:
        if self.state.value_format == ValueFormat.HEX:
            self.state.value_format = ValueFormat.DEC
        elif self.state.value_format == ValueFormat.DEC:
            self.state.value_format = ValueFormat.BIN
        else:
            self.state.value_format = ValueFormat.HEX
        self.notify(f'Format: {self.state.value_format.value}')
        self.query_one(RegisterTree).update_values(self.state)
        self._refresh_detail()
