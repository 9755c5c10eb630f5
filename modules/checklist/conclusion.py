"""Rule based narrative conclusion for a checklist record."""

from __future__ import annotations

from utils.timefmt import format_local_date

from .models import CableCondition, ChecklistRecord, brand_text

CABLE_SENTENCES = {
    CableCondition.DISORGANIZED: (
        "A organização do cabeamento estruturado encontra-se crítica (Desorganizada), "
        "necessitando de intervenção. "
    ),
    CableCondition.PARTIAL: "A organização dos cabos apresenta pontos de melhoria (Parcial). ",
    CableCondition.ORGANIZED: "O cabeamento estruturado encontra-se devidamente organizado. ",
}

NO_FIREWALL_WARNING = (
    "CRÍTICO: Não foi identificado firewall de borda dedicado no local, "
    "o que representa risco à segurança da rede. "
)

MACHINES_ISSUE = "estações de trabalho com anomalias de hardware ou software"
NETWORK_POINTS_ISSUE = "pontos de rede física danificados ou inoperantes"
SATISFACTION_ISSUE = "insatisfação reportada pelos usuários quanto aos serviços"

ISSUES_LEAD_IN = "Foram diagnosticados os seguintes pontos de atenção que requerem plano de ação: "
ALL_CLEAR = (
    "De modo geral, a infraestrutura avaliada apresenta estabilidade e boas condições de uso. "
)


def collect_issues(record: ChecklistRecord) -> list[str]:
    issues: list[str] = []
    if not record.all_machines_ok:
        issues.append(MACHINES_ISSUE)
    if not record.network_points_ok:
        issues.append(NETWORK_POINTS_ISSUE)
    if not record.employees_satisfied:
        issues.append(SATISFACTION_ISSUE)
    return issues


def generate_conclusion(record: ChecklistRecord) -> str:
    text = (
        f"A visita técnica realizada em {format_local_date(record.visit_date)} "
        f'ao local "{record.location_name}" '
    )
    text += (
        f"identificou uma infraestrutura composta por {record.switch_count} switch(es) de rede "
        f"e {record.antenna_count} antena(s) Wi-Fi. "
    )

    text += CABLE_SENTENCES[record.cable_condition]

    if record.has_firewall:
        status = "operacional" if record.firewall_working else "com falhas registradas"
        text += (
            f"A segurança perimetral é gerida por firewall {brand_text(record.firewall_brand)}, "
            f"estando atualmente {status}. "
        )
    else:
        text += NO_FIREWALL_WARNING

    issues = collect_issues(record)
    if issues:
        text += f"{ISSUES_LEAD_IN}{', '.join(issues)}. "
    else:
        text += ALL_CLEAR

    return text


__all__ = ["generate_conclusion", "collect_issues"]
