"""Left-pane section/register/field tree widget."""

from __future__ import annotations

from textual.message import Message
from textual.widgets import Tree
from textual.widgets._tree import TreeNode

from dcnregdump.dump import RegisterReport
from dcnregdump.sections import SectionSpec

from .state import AppState
from .types import FieldNodeData, RegisterNodeData, SectionNodeData, field_width, format_value


class RegisterTree(Tree):
    """Left pane: hierarchical section/register/field tree."""

    class SectionSelected(Message):
        def __init__(self, section: SectionSpec) -> None:
            super().__init__()
            self.section = section

    class RegisterSelected(Message):
        def __init__(self, section: SectionSpec, reg_name: str) -> None:
            super().__init__()
            self.section = section
            self.reg_name = reg_name

    class FieldSelected(Message):
        def __init__(self, section: SectionSpec, reg_name: str, label: str) -> None:
            super().__init__()
            self.section = section
            self.reg_name = reg_name
            self.label = label

    class NothingSelected(Message):
        pass

    def __init__(self) -> None:
        super().__init__('Registers', id='reg-tree')
        self.app_state: AppState | None = None
        self._reg_nodes: dict[tuple[str, str], TreeNode] = {}

    def _make_reg_label(self, report: RegisterReport, state: AppState) -> str:
        if report.error is not None:
            return f'{report.name} [dim]SKIP[/dim]'
        return f'{report.name} = {format_value(report.value, state.value_format, 32)}'

    def _add_field_nodes(self, node: TreeNode, section: SectionSpec,
                         report: RegisterReport, state: AppState) -> None:
        for f in report.fields:
            label = f'{f.label} = {format_value(f.value, state.value_format, field_width(f))}'
            node.add_leaf(label, data=FieldNodeData(section, report.name, f.label))

    def rebuild(self, state: AppState) -> None:
        self.app_state = state
        self.clear()
        self._reg_nodes.clear()

        if not state.sections:
            self.root.add_leaf('No registers found for any section.')
            return

        self.root.set_label(state.source_str or 'Registers')

        for s in state.sections:
            section_node = self.root.add(s.title, data=SectionNodeData(s.section))

            for r in s.registers:
                label = self._make_reg_label(r, state)
                if r.fields:
                    reg_node = section_node.add(label, data=RegisterNodeData(s.section, r.name))
                    self._add_field_nodes(reg_node, s.section, r, state)
                else:
                    reg_node = section_node.add_leaf(label, data=RegisterNodeData(s.section, r.name))
                self._reg_nodes[(s.title, r.name)] = reg_node

        self.root.expand()

    def update_values(self, state: AppState,
                      changed_regs: set[tuple[str, str]] | None = None) -> None:
        """Update register and field labels in-place.

        If changed_regs is given, only those (section title, register name)
        pairs are updated.
        """
        self.app_state = state

        for s in state.sections:
            for r in s.registers:
                key = (s.title, r.name)
                if changed_regs is not None and key not in changed_regs:
                    continue
                node = self._reg_nodes.get(key)
                if node is None:
                    continue
                node.set_label(self._make_reg_label(r, state))
                node.remove_children()
                node.allow_expand = bool(r.fields)
                self._add_field_nodes(node, s.section, r, state)

    def on_tree_node_highlighted(self, event: Tree.NodeHighlighted) -> None:
        data = event.node.data
        if data is None:
            self.post_message(self.NothingSelected())
        elif isinstance(data, SectionNodeData):
            self.post_message(self.SectionSelected(data.section))
        elif isinstance(data, RegisterNodeData):
            self.post_message(self.RegisterSelected(data.section, data.reg_name))
        elif isinstance(data, FieldNodeData):
            self.post_message(self.FieldSelected(data.section, data.reg_name, data.label))
