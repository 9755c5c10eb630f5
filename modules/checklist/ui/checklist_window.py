"""Qt window for filling in a site-visit checklist and exporting reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from PySide6.QtCore import QStringListModel, Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QCheckBox,
    QComboBox,
    QCompleter,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from utils.app_settings import export_dir as default_export_dir
from utils.timefmt import format_local_datetime

from .. import service
from ..locations import LocationIndex
from ..models import (
    AntennaVendor,
    CableCondition,
    ChecklistRecord,
    FirewallVendor,
    ReportBundle,
    brand_text,
)
from ..reports import export_report
from ..repository import ChecklistRepository

logger = logging.getLogger(__name__)


def _warn(parent: QWidget, title: str, text: str) -> None:
    QMessageBox.warning(parent, title, text)


def _inform(parent: QWidget, title: str, text: str) -> None:
    QMessageBox.information(parent, title, text)


def _confirm(parent: QWidget, title: str, text: str) -> bool:
    answer = QMessageBox.question(parent, title, text)
    return answer == QMessageBox.Yes


@dataclass(frozen=True)
class Column:
    field: str
    header: str
    kind: str = "text"  # text | int | bool | brand


class ItemTable(QTableWidget):
    """Table editor for one list of checklist items (switches, antennas, ...)."""

    def __init__(
        self,
        columns: Sequence[Column],
        on_edit: Callable[[str, str, Any], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(0, len(columns), parent)
        self._columns = list(columns)
        self._on_edit = on_edit
        self.setHorizontalHeaderLabels([c.header for c in self._columns])
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.horizontalHeader().setStretchLastSection(True)
        self.itemChanged.connect(self._item_changed)

    def set_items(self, items: Sequence[Any]) -> None:
        """Show ``items``, reusing existing cells when the rows still match.

        Cells are updated in place when the ids line up so an edit handler can
        refresh the table without deleting the cell that emitted the signal.
        """
        same_rows = self.rowCount() == len(items) and all(
            self.item_id(row) == item.id for row, item in enumerate(items)
        )
        self.blockSignals(True)
        try:
            if not same_rows:
                self.setRowCount(len(items))
            for row, item in enumerate(items):
                for col, column in enumerate(self._columns):
                    cell = self.item(row, col) if same_rows else None
                    if cell is None:
                        cell = QTableWidgetItem()
                        if column.kind == "bool":
                            cell.setFlags(Qt.ItemIsUserCheckable | Qt.ItemIsEnabled | Qt.ItemIsSelectable)
                        if col == 0:
                            cell.setData(Qt.UserRole, item.id)
                        self.setItem(row, col, cell)
                    self._fill(cell, column, getattr(item, column.field))
        finally:
            self.blockSignals(False)

    @staticmethod
    def _fill(cell: QTableWidgetItem, column: Column, value: Any) -> None:
        if column.kind == "bool":
            cell.setCheckState(Qt.Checked if value else Qt.Unchecked)
        elif column.kind == "brand":
            cell.setText(brand_text(value))
        else:
            cell.setText(str(value))

    def item_id(self, row: int) -> Optional[str]:
        cell = self.item(row, 0)
        return cell.data(Qt.UserRole) if cell is not None else None

    def selected_id(self) -> Optional[str]:
        rows = {index.row() for index in self.selectedIndexes()}
        if not rows:
            return None
        return self.item_id(min(rows))

    def _item_changed(self, cell: QTableWidgetItem) -> None:
        item_id = self.item_id(cell.row())
        if item_id is None:
            return
        column = self._columns[cell.column()]
        if column.kind == "bool":
            value: Any = cell.checkState() == Qt.Checked
        else:
            value = cell.text()
        self._on_edit(item_id, column.field, value)


SWITCH_COLUMNS = (
    Column("quantity", "Qtd", "int"),
    Column("brand", "Marca"),
    Column("model", "Modelo"),
    Column("ports", "Portas", "int"),
    Column("condition_ok", "Condição OK", "bool"),
    Column("notes", "Observações"),
)

ANTENNA_COLUMNS = (
    Column("quantity", "Qtd", "int"),
    Column("brand", "Marca", "brand"),
    Column("is_working", "Funcionando", "bool"),
    Column("notes", "Observações"),
)

MACHINE_COLUMNS = (
    Column("identifier", "Identificação"),
    Column("processor_gen", "Processador"),
    Column("os_updated", "Windows 11 Atualizado", "bool"),
    Column("problem_description", "Descrição do Problema"),
)


class ChecklistWindow(QWidget):
    """Dashboard of recent visits plus the checklist form and report preview."""

    def __init__(
        self,
        repository: ChecklistRepository,
        locations: LocationIndex,
        export_dir: Optional[Path] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("InfraCheck - Checklist de Visita Técnica")
        self._repository = repository
        self._locations = locations
        self._export_dir = Path(export_dir) if export_dir is not None else default_export_dir()
        self._record: ChecklistRecord = service.new_record()
        self._bundle: Optional[ReportBundle] = None
        self._loading = True

        self._build_ui()
        self.refresh_recent()
        self._load_record(self._record)

    # ------------------------------------------------------------------ state
    @property
    def record(self) -> ChecklistRecord:
        return self._record

    @property
    def bundle(self) -> Optional[ReportBundle]:
        return self._bundle

    def _apply(self, command: Callable[..., ChecklistRecord], *args: Any, **kwargs: Any) -> None:
        if self._loading:
            return
        self._record = command(self._record, *args, **kwargs)
        self._invalidate_report()

    def _set_field(self, name: str, value: Any) -> None:
        self._apply(service.update_fields, **{name: value})

    # ------------------------------------------------------------------ UI build
    def _build_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(12, 12, 12, 12)
        outer.setSpacing(10)

        outer.addWidget(self._build_dashboard())

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        form_host = QWidget()
        form_layout = QVBoxLayout(form_host)
        form_layout.addWidget(self._build_location_group())
        form_layout.addWidget(self._build_infrastructure_group())
        form_layout.addWidget(self._build_machines_group())
        form_layout.addWidget(self._build_network_group())
        form_layout.addWidget(self._build_satisfaction_group())
        form_layout.addWidget(self._build_observations_group())
        form_layout.addStretch(1)
        scroll.setWidget(form_host)
        outer.addWidget(scroll, 1)

        outer.addWidget(self._build_report_group())

    def _build_dashboard(self) -> QWidget:
        box = QGroupBox("Visitas recentes")
        layout = QHBoxLayout(box)
        self.recent_list = QListWidget()
        self.recent_list.setMaximumHeight(110)
        self.recent_list.itemDoubleClicked.connect(
            lambda item: self.resume(item.data(Qt.UserRole))
        )
        layout.addWidget(self.recent_list, 1)

        buttons = QVBoxLayout()
        self.new_button = QPushButton("Novo checklist")
        self.new_button.clicked.connect(lambda: self.start_new())
        buttons.addWidget(self.new_button)
        self.resume_button = QPushButton("Retomar local")
        self.resume_button.clicked.connect(self._resume_selected)
        buttons.addWidget(self.resume_button)
        buttons.addStretch(1)
        layout.addLayout(buttons)
        return box

    def _build_location_group(self) -> QWidget:
        box = QGroupBox("1. Informações do Local")
        form = QFormLayout(box)

        self.location_edit = QLineEdit()
        self.location_edit.setPlaceholderText("Busque ou digite o nome do local...")
        self._suggestions = QStringListModel(self)
        completer = QCompleter(self._suggestions, self)
        completer.setCaseSensitivity(Qt.CaseInsensitive)
        completer.setFilterMode(Qt.MatchContains)
        self.location_edit.setCompleter(completer)
        self.location_edit.textEdited.connect(self._update_suggestions)
        self.location_edit.textChanged.connect(lambda t: self._set_field("location_name", t))
        self.location_edit.editingFinished.connect(self._learn_location)
        form.addRow("Nome do Local", self.location_edit)

        self.responsible_edit = QLineEdit()
        self.responsible_edit.setPlaceholderText("Ex: Cliente (João Silva)")
        self.responsible_edit.textChanged.connect(lambda t: self._set_field("responsible_name", t))
        form.addRow("Responsável pelo Local", self.responsible_edit)

        self.technician_edit = QLineEdit()
        self.technician_edit.textChanged.connect(lambda t: self._set_field("technician_name", t))
        form.addRow("Técnico Responsável", self.technician_edit)

        self.visit_label = QLabel()
        form.addRow("Data da Visita", self.visit_label)
        return box

    def _build_infrastructure_group(self) -> QWidget:
        box = QGroupBox("2. CPD / Infraestrutura")
        layout = QVBoxLayout(box)

        cable_form = QFormLayout()
        self.cable_combo = QComboBox()
        self.cable_combo.addItems([c.value for c in CableCondition])
        self.cable_combo.currentTextChanged.connect(
            lambda t: self._apply(service.set_cable_condition, t)
        )
        cable_form.addRow("Organização dos Cabos", self.cable_combo)
        self.cable_notes_edit = QLineEdit()
        self.cable_notes_edit.textChanged.connect(lambda t: self._set_field("cable_notes", t))
        cable_form.addRow("Observações", self.cable_notes_edit)
        layout.addLayout(cable_form)

        layout.addWidget(QLabel("Switches de Rede"))
        self.switch_table = ItemTable(
            SWITCH_COLUMNS,
            lambda item_id, field, value: self._edit_item(service.update_switch, item_id, field, value),
        )
        layout.addWidget(self.switch_table)
        layout.addLayout(
            self._item_buttons(
                "Adicionar switch",
                lambda: self._apply_and_refresh(service.add_switch),
                lambda: self._remove_selected(self.switch_table, service.remove_switch),
            )
        )

        layout.addWidget(QLabel("Antenas Wi-Fi"))
        self.antenna_table = ItemTable(
            ANTENNA_COLUMNS,
            lambda item_id, field, value: self._edit_item(service.update_antenna, item_id, field, value),
        )
        self.antenna_table.setToolTip(
            "Marcas conhecidas: " + ", ".join(v.value for v in AntennaVendor)
        )
        layout.addWidget(self.antenna_table)
        layout.addLayout(
            self._item_buttons(
                "Adicionar antena",
                lambda: self._apply_and_refresh(service.add_antenna),
                lambda: self._remove_selected(self.antenna_table, service.remove_antenna),
            )
        )

        firewall_box = QGroupBox("Firewall")
        fw_layout = QFormLayout(firewall_box)
        self.has_firewall_check = QCheckBox("Existe firewall no local")
        self.has_firewall_check.toggled.connect(self._firewall_toggled)
        fw_layout.addRow(self.has_firewall_check)
        self.firewall_brand_combo = QComboBox()
        self.firewall_brand_combo.setEditable(True)
        self.firewall_brand_combo.addItems([v.value for v in FirewallVendor])
        self.firewall_brand_combo.currentTextChanged.connect(
            lambda t: self._apply(service.set_firewall_brand, t)
        )
        fw_layout.addRow("Marca", self.firewall_brand_combo)
        self.firewall_working_check = QCheckBox("Funcionando")
        self.firewall_working_check.toggled.connect(
            lambda checked: self._set_field("firewall_working", checked)
        )
        fw_layout.addRow(self.firewall_working_check)
        self.firewall_notes_edit = QLineEdit()
        self.firewall_notes_edit.textChanged.connect(lambda t: self._set_field("firewall_notes", t))
        fw_layout.addRow("Observações", self.firewall_notes_edit)
        self._firewall_details = [
            self.firewall_brand_combo,
            self.firewall_working_check,
            self.firewall_notes_edit,
        ]
        layout.addWidget(firewall_box)
        return box

    def _build_machines_group(self) -> QWidget:
        box = QGroupBox("3. Máquinas e Computadores")
        layout = QVBoxLayout(box)
        self.machines_ok_check = QCheckBox("Todas as máquinas estão OK")
        self.machines_ok_check.toggled.connect(self._machines_toggled)
        layout.addWidget(self.machines_ok_check)

        self.machines_panel = QWidget()
        panel_layout = QVBoxLayout(self.machines_panel)
        panel_layout.setContentsMargins(0, 0, 0, 0)
        self.machine_table = ItemTable(
            MACHINE_COLUMNS,
            lambda item_id, field, value: self._edit_item(service.update_machine, item_id, field, value),
        )
        panel_layout.addWidget(self.machine_table)
        panel_layout.addLayout(
            self._item_buttons(
                "Adicionar máquina",
                lambda: self._apply_and_refresh(service.add_machine),
                lambda: self._remove_selected(self.machine_table, service.remove_machine),
            )
        )
        layout.addWidget(self.machines_panel)
        return box

    def _build_network_group(self) -> QWidget:
        box = QGroupBox("4. Pontos de Rede")
        form = QFormLayout(box)
        self.network_ok_check = QCheckBox("Pontos de rede em bom estado")
        self.network_ok_check.toggled.connect(
            lambda checked: self._set_field("network_points_ok", checked)
        )
        form.addRow(self.network_ok_check)
        self.network_notes_edit = QLineEdit()
        self.network_notes_edit.textChanged.connect(
            lambda t: self._set_field("network_points_notes", t)
        )
        form.addRow("Observações", self.network_notes_edit)
        return box

    def _build_satisfaction_group(self) -> QWidget:
        box = QGroupBox("5. Satisfação dos Usuários")
        form = QFormLayout(box)
        self.satisfied_check = QCheckBox("Os colaboradores estão satisfeitos")
        self.satisfied_check.toggled.connect(self._satisfaction_toggled)
        form.addRow(self.satisfied_check)
        self.complaints_edit = QPlainTextEdit()
        self.complaints_edit.setPlaceholderText("Relato de reclamações")
        self.complaints_edit.setMaximumHeight(70)
        self.complaints_edit.textChanged.connect(
            lambda: self._set_field("complaints", self.complaints_edit.toPlainText())
        )
        form.addRow("Reclamações", self.complaints_edit)
        return box

    def _build_observations_group(self) -> QWidget:
        box = QGroupBox("Observações Gerais")
        layout = QVBoxLayout(box)
        self.observations_edit = QPlainTextEdit()
        self.observations_edit.setPlaceholderText("Outros detalhes relevantes da visita...")
        self.observations_edit.setMaximumHeight(90)
        self.observations_edit.textChanged.connect(
            lambda: self._set_field("observations", self.observations_edit.toPlainText())
        )
        layout.addWidget(self.observations_edit)
        return box

    def _build_report_group(self) -> QWidget:
        box = QGroupBox("Relatório")
        layout = QVBoxLayout(box)

        actions = QHBoxLayout()
        self.save_button = QPushButton("Salvar")
        self.save_button.clicked.connect(self.save)
        actions.addWidget(self.save_button)
        self.generate_button = QPushButton("Gerar relatório")
        self.generate_button.clicked.connect(self.generate_report)
        actions.addWidget(self.generate_button)
        actions.addStretch(1)
        self.export_buttons: dict[str, QPushButton] = {}
        for fmt, label in (("pdf", "Baixar PDF"), ("doc", "Baixar Word (DOC)"), ("txt", "Baixar TXT")):
            button = QPushButton(label)
            button.setEnabled(False)
            button.clicked.connect(lambda _checked=False, f=fmt: self.export(f))
            actions.addWidget(button)
            self.export_buttons[fmt] = button
        layout.addLayout(actions)

        self.conclusion_view = QPlainTextEdit()
        self.conclusion_view.setReadOnly(True)
        self.conclusion_view.setPlaceholderText("A conclusão é gerada automaticamente com o relatório.")
        self.conclusion_view.setMaximumHeight(100)
        layout.addWidget(self.conclusion_view)
        return box

    def _item_buttons(
        self, add_label: str, on_add: Callable[[], None], on_remove: Callable[[], None]
    ) -> QHBoxLayout:
        row = QHBoxLayout()
        add = QPushButton(add_label)
        add.clicked.connect(on_add)
        row.addWidget(add)
        remove = QPushButton("Remover selecionado")
        remove.clicked.connect(on_remove)
        row.addWidget(remove)
        row.addStretch(1)
        return row

    # ------------------------------------------------------------------ handlers
    def _update_suggestions(self, text: str) -> None:
        self._suggestions.setStringList(self._locations.suggest(text))

    def _learn_location(self) -> None:
        self._locations.learn(self.location_edit.text())

    def _firewall_toggled(self, checked: bool) -> None:
        for widget in self._firewall_details:
            widget.setEnabled(checked)
        self._set_field("has_firewall", checked)

    def _machines_toggled(self, checked: bool) -> None:
        self.machines_panel.setVisible(not checked)
        if self._loading:
            return
        self._apply(service.set_all_machines_ok, checked)
        self.machine_table.set_items(self._record.problematic_machines)

    def _satisfaction_toggled(self, checked: bool) -> None:
        self.complaints_edit.setEnabled(not checked)
        self._set_field("employees_satisfied", checked)

    def _apply_and_refresh(self, command: Callable[[ChecklistRecord], ChecklistRecord]) -> None:
        self._apply(command)
        self._refresh_tables()

    def _edit_item(self, command: Callable[..., ChecklistRecord], item_id: str, field: str, value: Any) -> None:
        try:
            self._apply(command, item_id, **{field: value})
        except (KeyError, ValueError) as exc:
            logger.warning("Ignoring edit of %s on %s: %s", field, item_id, exc)
        self._refresh_tables()

    def _remove_selected(self, table: ItemTable, command: Callable[[ChecklistRecord, str], ChecklistRecord]) -> None:
        item_id = table.selected_id()
        if item_id is None:
            _inform(self, "Remover", "Selecione um item para remover.")
            return
        self._apply(command, item_id)
        self._refresh_tables()

    def _resume_selected(self) -> None:
        item = self.recent_list.currentItem()
        if item is None:
            _inform(self, "Retomar", "Selecione um local na lista.")
            return
        self.resume(item.data(Qt.UserRole))

    # ------------------------------------------------------------------ refresh
    def _refresh_tables(self) -> None:
        self.switch_table.set_items(self._record.switches)
        self.antenna_table.set_items(self._record.antennas)
        self.machine_table.set_items(self._record.problematic_machines)

    def _invalidate_report(self) -> None:
        self._bundle = None
        for button in self.export_buttons.values():
            button.setEnabled(False)
        self.conclusion_view.clear()

    def _load_record(self, record: ChecklistRecord) -> None:
        self._loading = True
        try:
            self._record = record
            self.location_edit.setText(record.location_name)
            self.responsible_edit.setText(record.responsible_name)
            self.technician_edit.setText(record.technician_name)
            self.visit_label.setText(format_local_datetime(record.visit_date))
            self.cable_combo.setCurrentText(record.cable_condition.value)
            self.cable_notes_edit.setText(record.cable_notes)
            self.has_firewall_check.setChecked(record.has_firewall)
            self.firewall_brand_combo.setCurrentText(brand_text(record.firewall_brand))
            self.firewall_working_check.setChecked(record.firewall_working)
            self.firewall_notes_edit.setText(record.firewall_notes)
            self.machines_ok_check.setChecked(record.all_machines_ok)
            self.network_ok_check.setChecked(record.network_points_ok)
            self.network_notes_edit.setText(record.network_points_notes)
            self.satisfied_check.setChecked(record.employees_satisfied)
            self.complaints_edit.setPlainText(record.complaints)
            self.observations_edit.setPlainText(record.observations)
        finally:
            self._loading = False
        for widget in self._firewall_details:
            widget.setEnabled(record.has_firewall)
        self.machines_panel.setVisible(not record.all_machines_ok)
        self.complaints_edit.setEnabled(not record.employees_satisfied)
        self._refresh_tables()
        self._invalidate_report()

    def refresh_recent(self) -> None:
        self.recent_list.clear()
        for name, visited in self._repository.recent_visits():
            item = QListWidgetItem(f"{name} - última visita {format_local_datetime(visited)}")
            item.setData(Qt.UserRole, name)
            self.recent_list.addItem(item)

    # ------------------------------------------------------------------ actions
    def start_new(self, confirm: bool = True) -> None:
        if confirm and not _confirm(
            self,
            "Novo relatório",
            "Deseja iniciar um novo relatório? Todos os dados atuais serão perdidos.",
        ):
            return
        self._load_record(service.new_record())

    def resume(self, location_name: str) -> None:
        self._load_record(service.resume_record(self._repository, location_name))

    def save(self) -> None:
        if not self._record.location_name:
            _warn(self, "Salvar", "Informe o nome do local antes de salvar.")
            return
        service.save_checklist(self._repository, self._record)
        self.refresh_recent()

    def generate_report(self) -> Optional[ReportBundle]:
        try:
            bundle = service.generate_report(self._repository, self._record)
        except service.ChecklistIncompleteError as exc:
            _warn(self, "Campos obrigatórios", str(exc))
            return None
        self._bundle = bundle
        self.conclusion_view.setPlainText(bundle.conclusion)
        for button in self.export_buttons.values():
            button.setEnabled(True)
        self.refresh_recent()
        return bundle

    def export(self, fmt: str) -> Optional[Path]:
        if self._bundle is None:
            _warn(self, "Exportar", "Gere o relatório antes de exportar.")
            return None
        try:
            path = export_report(self._bundle, fmt, self._export_dir)
        except OSError as exc:
            logger.error("Export to %s failed: %s", self._export_dir, exc)
            _warn(self, "Exportar", f"Falha ao salvar o relatório: {exc}")
            return None
        _inform(self, "Exportar", f"Relatório salvo em:\n{path}")
        return path
