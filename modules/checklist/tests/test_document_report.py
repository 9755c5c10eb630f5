from __future__ import annotations

from modules.checklist.models import (
    AntennaGroup,
    FirewallVendor,
    Known,
    ProblematicMachine,
    SwitchGroup,
)
from modules.checklist.reports.document_report import render_document


def test_document_is_word_html(make_record):
    html = render_document(make_record(), "ok")
    assert html.startswith("<html xmlns:o='urn:schemas-microsoft-com:office:office'")
    assert "<meta charset='utf-8'>" in html
    assert html.rstrip().endswith("</body></html>")


def test_user_text_is_escaped(make_record):
    record = make_record(
        location_name="Loja <A&B>",
        observations="<script>alert(1)</script>",
        switches=(SwitchGroup(brand="H&P", notes="<b>"),),
    )
    html = render_document(record, 'Local "Loja <A&B>" visitado.')
    assert "<strong>Loja &lt;A&amp;B&gt;</strong>" in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<script>" not in html
    assert "H&amp;P" in html
    assert "<p>Local &quot;Loja &lt;A&amp;B&gt;&quot; visitado.</p>" in html


def test_empty_lists_show_placeholders(make_record):
    html = render_document(make_record(), "ok")
    assert "<p>Nenhum switch registrado.</p>" in html
    assert "<p>Nenhuma antena registrada.</p>" in html
    assert "data-table" not in html.split("</style>")[1]


def test_item_rows_in_order(make_record):
    record = make_record(
        switches=(
            SwitchGroup(quantity=2, brand="HP", model="1920", ports=48),
            SwitchGroup(brand="Cisco", model="SG350", condition_ok=False),
        ),
        antennas=(AntennaGroup(quantity=5, is_working=False),),
    )
    html = render_document(record, "ok")
    assert html.index("HP 1920") < html.index("Cisco SG350")
    assert "<tr><td>1</td><td>2</td><td>HP 1920</td><td>48</td><td>OK</td><td>-</td></tr>" in html
    assert "<td>Falha</td>" in html
    assert "<tr><td>1</td><td>5</td><td>UniFi</td><td>Falha</td><td>-</td></tr>" in html


def test_firewall_details_only_when_present(make_record):
    assert "<li><strong>Marca:" not in render_document(make_record(), "ok")
    html = render_document(
        make_record(has_firewall=True, firewall_brand=Known(FirewallVendor.SONICWALL)), "ok"
    )
    assert "<strong>Existe Firewall?</strong> Sim" in html
    assert "<li><strong>Marca:</strong> SonicWall</li>" in html
    assert "<li><strong>Status:</strong> Operacional</li>" in html


def test_machines_and_complaints(make_record):
    record = make_record(
        all_machines_ok=False,
        problematic_machines=(ProblematicMachine(identifier="PC-3", problem_description="Sem rede"),),
        employees_satisfied=False,
        complaints="Impressora",
    )
    html = render_document(record, "ok")
    assert "Foram identificadas máquinas com problemas." in html
    assert "<tr><td>1</td><td>PC-3</td>" in html
    assert '<span style="color:#cc0000">Sem rede</span>' in html
    assert "Não, há reclamações." in html
    assert "<strong>Reclamações:</strong> Impressora" in html


def test_observations_follow_conclusion(make_record):
    html = render_document(make_record(observations="Trocar nobreak"), "Resumo final")
    conclusion_at = html.index("Resumo final")
    observations_at = html.index("<strong>Observações Gerais:</strong> Trocar nobreak")
    assert html.index("conclusion-box\">") < conclusion_at < observations_at
    assert observations_at < html.index("Técnico Responsável")


def test_observations_omitted_when_blank(make_record):
    assert "Observações Gerais" not in render_document(make_record(), "ok")
