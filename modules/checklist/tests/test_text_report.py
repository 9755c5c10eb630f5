from __future__ import annotations

from modules.checklist.models import (
    AntennaGroup,
    CableCondition,
    Custom,
    ProblematicMachine,
    SwitchGroup,
)
from modules.checklist.reports.text_report import BANNER, RULE, render_text
from utils.timefmt import format_local_datetime

CONCLUSION = "Resumo da visita."


def _full_record(make_record):
    return make_record(
        cable_condition=CableCondition.PARTIAL,
        cable_notes="Rack sem etiquetas",
        switches=(
            SwitchGroup(quantity=2, brand="HP", model="1920", ports=48, notes="core"),
            SwitchGroup(brand="TP-Link", model="SG108", ports=8, condition_ok=False),
        ),
        antennas=(AntennaGroup(quantity=3, brand=Custom("Intelbras"), is_working=False),),
        has_firewall=True,
        firewall_working=False,
        all_machines_ok=False,
        problematic_machines=(
            ProblematicMachine(
                identifier="PC-01",
                processor_gen="i5 8ª",
                os_updated=False,
                problem_description="Lento",
            ),
        ),
        network_points_ok=False,
        employees_satisfied=False,
        complaints="Wi-Fi cai à tarde",
        observations="Voltar em abril",
    )


def test_header_and_visit_data(make_record):
    text = render_text(make_record(responsible_name=""), CONCLUSION)
    lines = text.splitlines()
    assert lines[0] == BANNER
    assert "RELATÓRIO DE CHECKLIST - INFRAESTRUTURA DE TI" in lines[1]
    assert f"Data e Hora:           {format_local_datetime(make_record().visit_date)}" in text
    assert "Responsável Local:     Não informado" in text
    assert "Técnico Responsável:   Ana Souza" in text


def test_empty_record_placeholders(make_record):
    text = render_text(make_record(), CONCLUSION)
    assert "  - Nenhum switch registrado." in text
    assert "  - Nenhuma antena registrada." in text
    assert "  - Observações: Nenhuma" in text
    assert "  - Existe Firewall: Não" in text
    assert "  - Marca:" not in text
    assert "Todas as máquinas estão operacionais." in text
    assert "Máquina com Problema" not in text
    assert "Relato de Reclamações" not in text
    assert "OBSERVAÇÕES GERAIS" not in text


def test_items_are_listed_in_order(make_record):
    text = render_text(_full_record(make_record), CONCLUSION)
    first = text.index("  Item 1:\n    - Quantidade: 2\n    - Equipamento: HP 1920\n    - Portas: 48")
    second = text.index("  Item 2:\n    - Quantidade: 1\n    - Equipamento: TP-Link SG108")
    assert first < second
    assert "    - Condição: OK\n    - Obs: core" in text
    assert "    - Condição: DEFEITO\n" in text
    assert "    - Marca: Intelbras\n    - Funcionando: Não" in text


def test_conditional_blocks(make_record):
    text = render_text(_full_record(make_record), CONCLUSION)
    assert "  - Organização: Parcial" in text
    assert "  - Status: Apresentando Falhas" in text
    assert "  - Obs: -" in text
    assert "  - Status Geral: Foram encontrados problemas." in text
    assert "  [ Máquina com Problema #1 ]" in text
    assert "    - Windows 11 Atualizado: Não" in text
    assert "  - Estado dos Pontos: Necessitam reparos" in text
    assert "  - Relato de Reclamações: Wi-Fi cai à tarde" in text


def test_sections_follow_fixed_order(make_record):
    text = render_text(_full_record(make_record), CONCLUSION)
    headings = [
        "DADOS DA VISITA",
        "1. CPD / INFRAESTRUTURA DE REDE",
        "2. ESTAÇÕES DE TRABALHO (MÁQUINAS)",
        "3. PONTOS DE REDE FÍSICA",
        "4. SATISFAÇÃO DOS USUÁRIOS",
        "5. CONCLUSÃO TÉCNICA",
        "OBSERVAÇÕES GERAIS",
        "Assinatura do Técnico Responsável",
    ]
    positions = [text.index(h) for h in headings]
    assert positions == sorted(positions)


def test_conclusion_and_signature(make_record):
    text = render_text(_full_record(make_record), CONCLUSION)
    assert f"5. CONCLUSÃO TÉCNICA\n{RULE}\n{CONCLUSION}\n" in text
    assert f"OBSERVAÇÕES GERAIS\n{RULE}\nVoltar em abril\n" in text
    assert "Assinatura do Técnico Responsável: Ana Souza" in text
    assert text.endswith("_" * 51 + "\n[ Espaço para Carimbo ]\n")


def test_machines_listed_only_when_flag_is_off(make_record):
    record = make_record(problematic_machines=(ProblematicMachine(identifier="PC-09"),))
    assert "PC-09" not in render_text(record, CONCLUSION)
