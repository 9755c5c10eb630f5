from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from modules.checklist.models import AntennaGroup, ProblematicMachine, SwitchGroup
from modules.checklist.reports.pdf_report import PAGE_LIMIT, PAGE_TOP, PdfReportLayout, render_pdf


def _layout(record, conclusion="Conclusão da visita."):
    c = canvas.Canvas(BytesIO(), pagesize=A4)
    layout = PdfReportLayout(c)
    layout.draw(record, conclusion)
    return layout


def _texts(layout):
    return [text for _, _, text in layout.lines]


def test_short_report_fits_one_page(make_record):
    layout = _layout(make_record())
    assert layout.page_count == 1
    texts = _texts(layout)
    assert texts[:2] == ["Relatório de Checklist", "Infraestrutura de TI"]
    assert "Nenhum switch registrado." in texts
    assert "Nenhuma antena registrada." in texts


def test_sections_in_order(make_record):
    record = make_record(observations="Trocar patch cords", all_machines_ok=False,
                         problematic_machines=(ProblematicMachine(identifier="PC-1"),))
    texts = _texts(_layout(record))
    order = [
        "1. CPD / Infraestrutura",
        "Switches de Rede",
        "Antenas Wi-Fi",
        "Firewall",
        "2. Máquinas e Computadores",
        "#1 | Máquina: PC-1",
        "3. Pontos de Rede",
        "4. Satisfação",
        "Conclusão Técnica",
        "Observações Gerais",
        "Técnico Responsável",
        "Carimbo",
    ]
    positions = [texts.index(label) for label in order]
    assert positions == sorted(positions)


def test_items_are_numbered(make_record):
    record = make_record(
        switches=(SwitchGroup(quantity=2, brand="HP", model="1920"), SwitchGroup(brand="Cisco")),
        antennas=(AntennaGroup(quantity=4, is_working=False),),
    )
    texts = _texts(_layout(record))
    assert "#1 | Qtd: 2 | HP 1920" in texts
    assert "#2 | Qtd: 1 | Cisco" in texts
    assert "#1 | Qtd: 4 | UniFi | Status: Falha" in texts


def test_long_report_paginates(make_record):
    record = make_record(
        switches=tuple(SwitchGroup(brand=f"SW{i}", notes="porta 3 com mau contato") for i in range(25)),
        antennas=tuple(AntennaGroup() for _ in range(15)),
        all_machines_ok=False,
        problematic_machines=tuple(
            ProblematicMachine(identifier=f"PC-{i}", problem_description="Não liga " * 30)
            for i in range(8)
        ),
    )
    layout = _layout(record)
    assert layout.page_count > 1
    for page, y, _ in layout.lines:
        assert 1 <= page <= layout.page_count
        assert y <= PAGE_LIMIT

    pages = [page for page, _, _ in layout.lines]
    assert pages == sorted(pages)
    signature_page = next(p for p, _, t in layout.lines if t == "Técnico Responsável")
    assert signature_page == layout.page_count


def test_cursor_resets_on_new_page(make_record):
    record = make_record(switches=tuple(SwitchGroup() for _ in range(40)))
    layout = _layout(record)
    first_on_page_two = min(y for page, y, _ in layout.lines if page == 2)
    assert PAGE_TOP <= first_on_page_two < PAGE_TOP + 10


def test_render_pdf_bytes(make_record):
    record = make_record(switches=tuple(SwitchGroup() for _ in range(40)))
    data = render_pdf(record, "Conclusao")
    assert data.startswith(b"%PDF")

    reader = PdfReader(BytesIO(data))
    assert len(reader.pages) == _layout(record, "Conclusao").page_count
    first = reader.pages[0].extract_text()
    assert "Infraestrutura de TI" in first
    assert "CSC" in first
    assert reader.metadata.author == "Ana Souza"


@pytest.mark.parametrize(
    "overrides",
    [
        {"observations": "Trocar patch cords do rack principal. " * 200},
        {"employees_satisfied": False, "complaints": "Internet cai toda tarde. " * 250},
        {"cable_notes": "Cabos sem identificação no rack. " * 220},
        {
            "all_machines_ok": False,
            "problematic_machines": (
                ProblematicMachine(identifier="PC-9", problem_description="Tela azul ao iniciar. " * 300),
            ),
        },
    ],
)
def test_long_free_text_stays_on_the_page(make_record, overrides):
    layout = _layout(make_record(**overrides))
    assert layout.page_count > 1
    assert max(y for _, y, _ in layout.lines) <= PAGE_LIMIT
    assert min(y for _, y, _ in layout.lines) >= PAGE_TOP
    assert _texts(layout)[-2:] == ["Técnico Responsável", "Carimbo"]


def test_long_text_is_kept_whole(make_record):
    words = [f"item{i}" for i in range(900)]
    layout = _layout(make_record(observations=" ".join(words)))
    start = _texts(layout).index("Observações Gerais") + 1
    drawn = " ".join(_texts(layout)[start:-3]).split()
    assert drawn == words


def test_long_conclusion_paginates(make_record):
    layout = _layout(make_record(), "Conclusão extensa da visita técnica. " * 300)
    assert layout.page_count > 1
    assert max(y for _, y, _ in layout.lines) <= PAGE_LIMIT


def test_long_item_summary_is_wrapped(make_record):
    record = make_record(switches=(SwitchGroup(brand="Fabricante " * 20, model="X" * 10),))
    layout = _layout(record)
    summary = [t for t in _texts(layout) if "Fabricante" in t]
    assert len(summary) > 1
    assert summary[0].startswith("#1 | Qtd: 1 | Fabricante")
    for text in summary:
        assert stringWidth(text, "Helvetica-Bold", 9) / mm <= layout.content_width - 4
