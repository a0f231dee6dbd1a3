"""Right-pane detail/display widgets for the dump browser."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from dcnregdump.decoder import DecodedField
from dcnregdump.dump import RegisterReport, SectionReport

from .state import AppState
from .types import FIELD_COLORS, ValueFormat, field_bits, field_width, format_value

REGISTER_BITS = 32


class BitDiagram(Static):
    """Renders a bit diagram for a register value."""

    def __init__(self, **kwargs) -> None:
        super().__init__('', **kwargs)

    def set_register(self, report: RegisterReport, highlight: str | None = None) -> None:
        lines = [self._header(report)]

        if report.error is not None:
            lines.append(f'[yellow]SKIP: {report.error.reason}[/yellow]')
            self.update('\n'.join(lines))
            return

        value = report.value
        assert value is not None

        # bit index -> (field, color index)
        field_map: dict[int, tuple[DecodedField, int]] = {}
        for i, f in enumerate(report.fields):
            for bit in range(REGISTER_BITS):
                if f.mask & (1 << bit):
                    field_map[bit] = (f, i % len(FIELD_COLORS))

        lines.append('')

        # Render 16 bits per row, MSB first
        bits_per_row = 16
        for row_start_bit in range(REGISTER_BITS - 1, -1, -bits_per_row):
            row_end_bit = row_start_bit - bits_per_row + 1

            hdr = ''.join(f'{bit:>4}' for bit in range(row_start_bit, row_end_bit - 1, -1))
            lines.append(f'[dim]{hdr}[/dim]')

            vals = ''
            for bit in range(row_start_bit, row_end_bit - 1, -1):
                bv = (value >> bit) & 1
                if bit in field_map:
                    fld, cidx = field_map[bit]
                    if highlight is not None and fld.label != highlight:
                        vals += f'[dim]{bv:>4}[/dim]'
                    else:
                        color = FIELD_COLORS[cidx]
                        vals += f'[{color}]{bv:>4}[/{color}]'
                else:
                    vals += f'[dim]{bv:>4}[/dim]'
            lines.append(vals)

            labels = ''
            bit = row_start_bit
            while bit >= row_end_bit:
                if bit not in field_map:
                    labels += '    '
                    bit -= 1
                    continue

                fld, cidx = field_map[bit]
                span_low = bit
                while (
                    span_low - 1 >= row_end_bit
                    and (span_low - 1) in field_map
                    and field_map[span_low - 1][0] is fld
                ):
                    span_low -= 1
                char_width = (bit - span_low + 1) * 4
                name = fld.label
                if len(name) > char_width:
                    name = name[: char_width - 1] + '~'
                if highlight is not None and fld.label != highlight:
                    labels += f'[dim]{name:^{char_width}}[/dim]'
                else:
                    color = FIELD_COLORS[cidx]
                    labels += f'[{color}]{name:^{char_width}}[/{color}]'
                bit = span_low - 1
            lines.append(labels)
            lines.append('')

        self.update('\n'.join(lines))

    @staticmethod
    def _header(report: RegisterReport) -> str:
        if report.address is None:
            return f'[bold]{report.name}[/bold]'
        return f'[bold]{report.name}[/bold] @ 0x{report.address:X}'

    def clear_display(self) -> None:
        self.update('')


class FieldTable(Static):
    """Renders the decoded fields of a register."""

    def __init__(self) -> None:
        super().__init__('', id='field-table')

    def set_register(self, report: RegisterReport, fmt: ValueFormat,
                     highlight: str | None = None) -> None:
        if report.error is not None:
            self.update('')
            return

        if not report.fields:
            self.update('[dim]No fields defined[/dim]')
            return

        name_w = max(len('Name'), *(len(f.label) for f in report.fields))
        bits_w = max(len('Bits'), *(len('{}:{}'.format(*field_bits(f))) for f in report.fields))

        hdr = f'{"Name":<{name_w}}  {"Bits":>{bits_w}}  {"Mask":>10}  Value'
        lines = [f'[bold]{hdr}[/bold]', '─' * len(hdr)]

        for i, f in enumerate(report.fields):
            bits_str = '{}:{}'.format(*field_bits(f))
            val_str = format_value(f.value, fmt, field_width(f))
            color = FIELD_COLORS[i % len(FIELD_COLORS)]
            if highlight is not None and f.label != highlight:
                color = 'dim'
            lines.append(
                f'[{color}]{f.label:<{name_w}}[/{color}]  {bits_str:>{bits_w}}  0x{f.mask:08X}  {val_str}'
            )

        self.update('\n'.join(lines))

    def clear_display(self) -> None:
        self.update('')


class SectionDetailWidget(Static):
    """Detail view for a selected section: register summary."""

    def __init__(self) -> None:
        super().__init__('', id='section-detail')

    def set_section(self, report: SectionReport) -> None:
        total = len(report.registers)
        skipped = sum(1 for r in report.registers if r.skipped)

        lines = [
            f'[bold]{report.title}[/bold]',
            '',
            f'  Pattern:   {report.section.pattern}',
            f'  Registers: {total}',
            f'  Read:      {total - skipped}',
            f'  Skipped:   {skipped}',
        ]

        self.update('\n'.join(lines))

    def clear_display(self) -> None:
        self.update('')


class RootDetailWidget(Static):
    """Detail view for the root node: definition source and section summary."""

    def __init__(self) -> None:
        super().__init__('', id='root-detail')

    def set_root(self, state: AppState) -> None:
        lines = ['[bold]Definitions[/bold]', f'  {state.source_str or "-"}', '']

        total_regs = sum(len(s.registers) for s in state.sections)
        total_fields = sum(len(r.fields) for s in state.sections for r in s.registers)

        lines.append('[bold]Totals[/bold]')
        lines.append(f'  Sections:  {len(state.sections)}')
        lines.append(f'  Registers: {total_regs}')
        lines.append(f'  Fields:    {total_fields}')

        self.update('\n'.join(lines))

    def clear_display(self) -> None:
        self.update('')


class DetailPanel(VerticalScroll):
    """Right pane: switches between register, section, and root detail views."""

    def compose(self) -> ComposeResult:
        yield BitDiagram(id='bit-diagram')
        yield FieldTable()
        yield SectionDetailWidget()
        yield RootDetailWidget()

    def on_mount(self) -> None:
        self.query_one(SectionDetailWidget).display = False
        self.query_one(RootDetailWidget).display = False

    def _show_only(self, widget_type: type) -> None:
        views: list[type] = [BitDiagram, FieldTable, SectionDetailWidget, RootDetailWidget]
        for vt in views:
            self.query_one(vt).display = vt == widget_type
        # BitDiagram and FieldTable are shown together for register view
        if widget_type == BitDiagram:
            self.query_one(FieldTable).display = True

    def set_register(self, report: RegisterReport, fmt: ValueFormat,
                     highlight: str | None = None) -> None:
        self._show_only(BitDiagram)
        self.query_one(BitDiagram).set_register(report, highlight)
        self.query_one(FieldTable).set_register(report, fmt, highlight)

    def set_section(self, report: SectionReport) -> None:
        self._show_only(SectionDetailWidget)
        self.query_one(SectionDetailWidget).set_section(report)

    def set_root(self, state: AppState) -> None:
        self._show_only(RootDetailWidget)
        self.query_one(RootDetailWidget).set_root(state)
