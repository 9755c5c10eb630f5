"""Word-compatible HTML checklist report (saved with a ``.doc`` extension)."""

from __future__ import annotations

from html import escape

from utils.timefmt import format_local_datetime

from ..models import ChecklistRecord, brand_text
from .common import bool_to_text

STYLES = """
    body { font-family: 'Arial', sans-serif; font-size: 11pt; line-height: 1.5; color: #333; }
    .header { text-align: center; margin-bottom: 30px; border-bottom: 2px solid #333; padding-bottom: 10px; }
    h1 { font-size: 18pt; color: #000; margin: 0; text-transform: uppercase; }
    h2 { font-size: 14pt; color: #1f4e79; border-bottom: 1px solid #ccc; margin-top: 25px; padding-bottom: 5px; }
    h3 { font-size: 12pt; font-weight: bold; margin-top: 15px; color: #444; }
    .meta-table { width: 100%; margin-bottom: 20px; }
    .meta-table td { padding: 5px; vertical-align: top; }
    .label { font-weight: bold; color: #555; }
    table.data-table { width: 100%; border-collapse: collapse; margin-top: 10px; font-size: 10pt; }
    table.data-table th { background-color: #f2f2f2; border: 1px solid #999; padding: 8px; text-align: left; }
    table.data-table td { border: 1px solid #ccc; padding: 8px; }
    .conclusion-box { background-color: #f9f9f9; border: 1px solid #e0e0e0; padding: 15px; margin-top: 10px; }
    .footer { margin-top: 60px; page-break-inside: avoid; }
    .signature-line { border-top: 1px solid #000; width: 60%; margin-top: 50px; padding-top: 5px; }
    .stamp-box { border: 1px dashed #999; width: 200px; height: 100px; margin-top: 30px; padding: 10px; text-align: center; color: #999; }
"""


def _e(value: object) -> str:
    return escape(str(value))


def _table(headers: list[str], rows: list[list[str]]) -> str:
    """Data table with a leading 1-based ``#`` column in entry order."""
    head = "".join(f"<th>{h}</th>" for h in ["#", *headers])
    body = "".join(
        f"<tr><td>{idx}</td>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>\n"
        for idx, row in enumerate(rows, start=1)
    )
    return (
        "<table class=\"data-table\">\n"
        f"<thead><tr>{head}</tr></thead>\n"
        f"<tbody>\n{body}</tbody>\n"
        "</table>"
    )


def _switches_section(record: ChecklistRecord) -> str:
    if not record.switches:
        return "<p>Nenhum switch registrado.</p>"
    rows = [
        [
            _e(s.quantity),
            f"{_e(s.brand)} {_e(s.model)}",
            _e(s.ports),
            "OK" if s.condition_ok else "Falha",
            _e(s.notes or "-"),
        ]
        for s in record.switches
    ]
    return _table(["Qtd", "Equipamento", "Portas", "Condição", "Observações"], rows)


def _antennas_section(record: ChecklistRecord) -> str:
    if not record.antennas:
        return "<p>Nenhuma antena registrada.</p>"
    rows = [
        [
            _e(a.quantity),
            _e(brand_text(a.brand)),
            "Funcionando" if a.is_working else "Falha",
            _e(a.notes or "-"),
        ]
        for a in record.antennas
    ]
    return _table(["Qtd", "Marca", "Status", "Observações"], rows)


def _firewall_section(record: ChecklistRecord) -> str:
    html = f"<p><strong>Existe Firewall?</strong> {bool_to_text(record.has_firewall)}</p>\n"
    if record.has_firewall:
        html += (
            "<ul>\n"
            f"  <li><strong>Marca:</strong> {_e(brand_text(record.firewall_brand))}</li>\n"
            f"  <li><strong>Status:</strong> {'Operacional' if record.firewall_working else 'Com Falha'}</li>\n"
            f"  <li><strong>Obs:</strong> {_e(record.firewall_notes or '-')}</li>\n"
            "</ul>\n"
        )
    return html


def _machines_section(record: ChecklistRecord) -> str:
    status = (
        "Todas as máquinas estão em perfeito estado."
        if record.all_machines_ok
        else "Foram identificadas máquinas com problemas."
    )
    html = f"<p><strong>Status Geral:</strong> {status}</p>\n"
    if not record.all_machines_ok:
        rows = [
            [
                _e(m.identifier),
                _e(m.processor_gen),
                bool_to_text(m.os_updated),
                f"<span style=\"color:#cc0000\">{_e(m.problem_description)}</span>",
            ]
            for m in record.problematic_machines
        ]
        html += _table(["ID", "Processador", "Windows 11", "Descrição do Problema"], rows)
    return html


def render_document(record: ChecklistRecord, conclusion: str) -> str:
    cable_notes = (
        f"<p><em>Obs: {_e(record.cable_notes)}</em></p>" if record.cable_notes else ""
    )
    complaints = ""
    if not record.employees_satisfied:
        complaints = (
            "<p style=\"background-color:#fff0f0; padding:10px; border:1px solid #ffcccc;\">"
            f"<strong>Reclamações:</strong> {_e(record.complaints)}</p>"
        )
    observations = (
        f"<p><strong>Observações Gerais:</strong> {_e(record.observations)}</p>"
        if record.observations
        else ""
    )
    satisfied = "Sim, satisfeitos." if record.employees_satisfied else "Não, há reclamações."

    return f"""<html xmlns:o='urn:schemas-microsoft-com:office:office' xmlns:w='urn:schemas-microsoft-com:office:word' xmlns='http://www.w3.org/TR/REC-html40'>
<head><meta charset='utf-8'><title>Relatório</title>
<style>{STYLES}</style>
</head>
<body>
  <div class="header">
    <h1>Relatório de Checklist</h1>
    <p style="margin:5px 0 0 0; font-size: 12pt;">Infraestrutura de TI</p>
  </div>

  <table class="meta-table">
    <tr><td width="20%"><span class="label">Local:</span></td><td width="80%"><strong>{_e(record.location_name)}</strong></td></tr>
    <tr><td><span class="label">Data/Hora:</span></td><td>{format_local_datetime(record.visit_date)}</td></tr>
    <tr><td><span class="label">Responsável Local:</span></td><td>{_e(record.responsible_name)}</td></tr>
    <tr><td><span class="label">Técnico:</span></td><td>{_e(record.technician_name)}</td></tr>
  </table>

  <h2>1. CPD / Infraestrutura</h2>
  <p><span class="label">Organização dos Cabos:</span> {record.cable_condition.value}</p>
  {cable_notes}

  <h3>Switches de Rede</h3>
  {_switches_section(record)}

  <h3>Antenas Wi-Fi</h3>
  {_antennas_section(record)}

  <h3>Firewall</h3>
  {_firewall_section(record)}

  <h2>2. Máquinas e Computadores</h2>
  {_machines_section(record)}

  <h2>3. Pontos de Rede</h2>
  <p><strong>Estado Físico/Funcional:</strong> {'Bons' if record.network_points_ok else 'Apresentam problemas'}</p>
  <p><em>Obs: {_e(record.network_points_notes or 'Nenhuma observação.')}</em></p>

  <h2>4. Satisfação dos Usuários</h2>
  <p><strong>Satisfação Geral:</strong> {satisfied}</p>
  {complaints}

  <h2>5. Conclusão e Observações</h2>
  <div class="conclusion-box">
    <h3>Resumo Técnico</h3>
    <p>{_e(conclusion)}</p>
  </div>
  {observations}

  <div class="footer">
    <div class="signature-line">
      <strong>{_e(record.technician_name)}</strong><br>
      Técnico Responsável
    </div>
    <div class="stamp-box">
      <br><br>
      [ Espaço para Carimbo ]
    </div>
  </div>
</body></html>
"""
