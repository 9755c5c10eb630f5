"""Plain text checklist report."""

from __future__ import annotations

from utils.timefmt import format_local_datetime

from ..models import ChecklistRecord, brand_text
from .common import bool_to_text

RULE = "-" * 64
BANNER = "=" * 64


def render_text(record: ChecklistRecord, conclusion: str) -> str:
    lines: list[str] = [
        BANNER,
        "           RELATÓRIO DE CHECKLIST - INFRAESTRUTURA DE TI        ",
        BANNER,
        "",
        "DADOS DA VISITA",
        RULE,
        f"Local:                 {record.location_name}",
        f"Data e Hora:           {format_local_datetime(record.visit_date)}",
        f"Responsável Local:     {record.responsible_name or 'Não informado'}",
        f"Técnico Responsável:   {record.technician_name}",
        "",
        "1. CPD / INFRAESTRUTURA DE REDE",
        RULE,
        "[ Cabos ]",
        f"  - Organização: {record.cable_condition.value}",
        f"  - Observações: {record.cable_notes or 'Nenhuma'}",
        "",
        "[ Switches de Rede ]",
    ]

    if record.switches:
        for idx, sw in enumerate(record.switches, start=1):
            lines += [
                f"  Item {idx}:",
                f"    - Quantidade: {sw.quantity}",
                f"    - Equipamento: {sw.brand} {sw.model}",
                f"    - Portas: {sw.ports}",
                f"    - Condição: {'OK' if sw.condition_ok else 'DEFEITO'}",
            ]
            if sw.notes:
                lines.append(f"    - Obs: {sw.notes}")
    else:
        lines.append("  - Nenhum switch registrado.")
    lines += ["", "[ Antenas Wi-Fi ]"]

    if record.antennas:
        for idx, ant in enumerate(record.antennas, start=1):
            lines += [
                f"  Item {idx}:",
                f"    - Quantidade: {ant.quantity}",
                f"    - Marca: {brand_text(ant.brand)}",
                f"    - Funcionando: {bool_to_text(ant.is_working)}",
            ]
            if ant.notes:
                lines.append(f"    - Obs: {ant.notes}")
    else:
        lines.append("  - Nenhuma antena registrada.")
    lines += ["", "[ Firewall ]", f"  - Existe Firewall: {bool_to_text(record.has_firewall)}"]

    if record.has_firewall:
        status = "Funcionando Normalmente" if record.firewall_working else "Apresentando Falhas"
        lines += [
            f"  - Marca: {brand_text(record.firewall_brand)}",
            f"  - Status: {status}",
            f"  - Obs: {record.firewall_notes or '-'}",
        ]
    lines.append("")

    machines_status = (
        "Todas as máquinas estão operacionais."
        if record.all_machines_ok
        else "Foram encontrados problemas."
    )
    lines += [
        "2. ESTAÇÕES DE TRABALHO (MÁQUINAS)",
        RULE,
        f"  - Status Geral: {machines_status}",
    ]
    if not record.all_machines_ok:
        for idx, pm in enumerate(record.problematic_machines, start=1):
            lines += [
                "",
                f"  [ Máquina com Problema #{idx} ]",
                f"    - ID: {pm.identifier}",
                f"    - Processador: {pm.processor_gen}",
                f"    - Windows 11 Atualizado: {bool_to_text(pm.os_updated)}",
                f"    - Descrição do Problema: {pm.problem_description}",
            ]
    lines.append("")

    points_status = "Em perfeito estado" if record.network_points_ok else "Necessitam reparos"
    lines += [
        "3. PONTOS DE REDE FÍSICA",
        RULE,
        f"  - Estado dos Pontos: {points_status}",
        f"  - Observações: {record.network_points_notes or 'Nenhuma'}",
        "",
        "4. SATISFAÇÃO DOS USUÁRIOS",
        RULE,
        f"  - Os colaboradores estão satisfeitos? {bool_to_text(record.employees_satisfied)}",
    ]
    if not record.employees_satisfied:
        lines.append(f"  - Relato de Reclamações: {record.complaints}")
    lines.append("")

    text = "\n".join(lines) + "\n"
    text += f"5. CONCLUSÃO TÉCNICA\n{RULE}\n{conclusion}\n\n"

    if record.observations:
        text += f"OBSERVAÇÕES GERAIS\n{RULE}\n{record.observations}\n\n"

    text += "\n\n"
    text += "_" * 51 + "\n"
    text += f"Assinatura do Técnico Responsável: {record.technician_name}\n\n\n"
    text += "_" * 51 + "\n"
    text += "[ Espaço para Carimbo ]\n"
    return text
