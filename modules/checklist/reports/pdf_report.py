"""Paginated PDF checklist report drawn on a reportlab canvas.

Layout works top-down in millimetres. A running cursor tracks the vertical
offset; every step that emits content first calls
:meth:`PdfReportLayout.check_page_break` with the space it needs and a new page
starts (cursor back at ``PAGE_TOP``) once ``cursor + needed`` would pass
``PAGE_LIMIT``.
"""

from __future__ import annotations

from io import BytesIO
from typing import Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from utils.timefmt import format_local_datetime

from ..models import ChecklistRecord, brand_text
from .common import bool_to_text

PAGE_TOP = 20.0
PAGE_LIMIT = 280.0
MARGIN = 20.0

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

DARK_BLUE = (0, 51, 102)
ITEM_FILL = (245, 247, 250)
CONCLUSION_FILL = (240, 248, 255)
ALERT_RED = (180, 0, 0)

def _rgb(color: Sequence[int]) -> tuple[float, float, float]:
    r, g, b = color
    return r / 255.0, g / 255.0, b / 255.0

class PdfReportLayout:
    """Draws one checklist report and remembers what went on which page."""

    def __init__(self, canv: canvas.Canvas, pagesize: tuple[float, float] = A4) -> None:
        self.canvas = canv
        self.page_width = pagesize[0] / mm
        self.page_height = pagesize[1] / mm
        self.content_width = self.page_width - 2 * MARGIN
        self.y = PAGE_TOP
        self.page = 1
        self.lines: list[tuple[int, float, str]] = []

    # ------------------------------------------------------------ primitives
    def check_page_break(self, needed: float = 10) -> None:
        if self.y + needed > PAGE_LIMIT:
            self.canvas.showPage()
            self.page += 1
            self.y = PAGE_TOP

    def _py(self, y: float) -> float:
        return (self.page_height - y) * mm

    def _font(self, name: str, size: float, color: Sequence[int] = (0, 0, 0)) -> None:
        self.canvas.setFont(name, size)
        self.canvas.setFillColorRGB(*_rgb(color))

    def _text(self, text: str, x: float, y: float, *, align: str = "left") -> None:
        if align == "center":
            self.canvas.drawCentredString(x * mm, self._py(y), text)
        else:
            self.canvas.drawString(x * mm, self._py(y), text)
        self.lines.append((self.page, y, text))

    def _flow(
        self,
        lines: Sequence[str],
        x: float,
        leading: float = 5,
        *,
        font: str = FONT,
        size: float = 10,
        color: Sequence[int] = (0, 0, 0),
        fill: Optional[Sequence[int]] = None,
        bar: Optional[Sequence[int]] = None,
    ) -> None:
        """Draw wrapped lines one at a time, breaking pages between lines.

        ``fill`` paints a band behind each line and ``bar`` a vertical mark on
        the left margin, so blocks split across pages keep their decoration.
        """
        for line in lines:
            self.check_page_break(leading)
            if fill is not None:
                self._fill_rect(MARGIN, self.y - 4, self.content_width, leading, fill)
            if bar is not None:
                self.canvas.setStrokeColorRGB(*_rgb(bar))
                self.canvas.setLineWidth(0.1)
                self.canvas.line(
                    MARGIN * mm, self._py(self.y - 4), MARGIN * mm, self._py(self.y - 4 + leading)
                )
            self._font(font, size, color)
            self._text(line, x, self.y)
            self.y += leading

    def _split(self, text: str, font: str, size: float, width: float) -> list[str]:
        lines = simpleSplit(text, font, size, width * mm)
        return lines or [""]

    def _fill_rect(self, x: float, y: float, width: float, height: float, color: Sequence[int]) -> None:
        self.canvas.setFillColorRGB(*_rgb(color))
        self.canvas.rect(x * mm, self._py(y + height), width * mm, height * mm, stroke=0, fill=1)

    def _rule(self, x1: float, x2: float, y: float, color: Sequence[int], width: float) -> None:
        self.canvas.setStrokeColorRGB(*_rgb(color))
        self.canvas.setLineWidth(width)
        self.canvas.line(x1 * mm, self._py(y), x2 * mm, self._py(y))

    # ------------------------------------------------------------ blocks
    def draw_line(self) -> None:
        self.check_page_break(10)
        self._rule(MARGIN, self.page_width - MARGIN, self.y, (200, 200, 200), 0.2)
        self.y += 10

    def add_title(self, text: str) -> None:
        self.check_page_break(15)
        self._font(FONT_BOLD, 14, DARK_BLUE)
        self._text(text, MARGIN, self.y)
        self.y += 8

    def add_subtitle(self, text: str) -> None:
        self.check_page_break(10)
        self._font(FONT_BOLD, 12, (50, 50, 50))
        self._text(text, MARGIN, self.y)
        self.y += 6

    def add_pair(self, label: str, value: str, indent: float = 0) -> None:
        label_text = f"{label}:"
        label_width = stringWidth(f"{label_text} ", FONT_BOLD, 10) / mm
        value_x = MARGIN + indent + label_width
        value_lines = self._split(value, FONT, 10, self.content_width - indent - label_width)
        self.check_page_break(7)
        self._font(FONT_BOLD, 10)
        self._text(label_text, MARGIN + indent, self.y)
        self._font(FONT, 10)
        self._text(value_lines[0], value_x, self.y)
        self.y += 6
        self._flow(value_lines[1:], value_x, 6)

    def add_paragraph(self, text: str, indent: float = 0, color: Sequence[int] = (0, 0, 0)) -> None:
        lines = self._split(text, FONT, 10, self.content_width - indent)
        self.check_page_break(min(10, len(lines) * 5 + 2))
        self._flow(lines, MARGIN + indent, 5, color=color)
        self.y += 2

    # ------------------------------------------------------------ sections
    def _header(self, record: ChecklistRecord) -> None:
        center = self.page_width / 2
        self._font(FONT_BOLD, 18, DARK_BLUE)
        self._text("Relatório de Checklist", center, self.y, align="center")
        self.y += 8
        self._font(FONT_BOLD, 14, (80, 80, 80))
        self._text("Infraestrutura de TI", center, self.y, align="center")
        self.y += 15
        self._rule(MARGIN, self.page_width - MARGIN, self.y, DARK_BLUE, 0.5)
        self.y += 10

        self.add_pair("Local", record.location_name)
        self.add_pair("Data e Hora", format_local_datetime(record.visit_date))
        self.add_pair("Responsável Local", record.responsible_name or "N/A")
        self.add_pair("Técnico Responsável", record.technician_name)
        self.y += 5
        self.draw_line()

    def _item_box(self, heading: str, details: Optional[str] = None) -> None:
        """Tinted entry for one switch or antenna, wrapped to the content width."""
        width = self.content_width - 4
        head = self._split(heading, FONT_BOLD, 9, width)
        body = self._split(details, FONT, 9, width) if details else []
        self.check_page_break(min(15, (len(head) + len(body)) * 5 + 5))
        self._flow(head, MARGIN + 2, 5, font=FONT_BOLD, size=9, fill=ITEM_FILL)
        self._flow(body, MARGIN + 2, 5, font=FONT, size=9, fill=ITEM_FILL)
        self.y += 2

    def _infrastructure(self, record: ChecklistRecord) -> None:
        self.add_title("1. CPD / Infraestrutura")
        self.add_pair("Organização dos Cabos", record.cable_condition.value)
        if record.cable_notes:
            self.add_paragraph(f"Obs: {record.cable_notes}", 5)
        self.y += 3

        self.add_subtitle("Switches de Rede")
        if not record.switches:
            self.add_paragraph("Nenhum switch registrado.", 5)
        for idx, sw in enumerate(record.switches, start=1):
            status = "OK" if sw.condition_ok else "Defeito"
            self._item_box(
                f"#{idx} | Qtd: {sw.quantity} | {sw.brand} {sw.model}",
                f"Portas: {sw.ports} | Status: {status}",
            )
            if sw.notes:
                self.add_paragraph(f"Obs: {sw.notes}", 5)
            self.y += 2
        self.y += 3

        self.add_subtitle("Antenas Wi-Fi")
        if not record.antennas:
            self.add_paragraph("Nenhuma antena registrada.", 5)
        for idx, ant in enumerate(record.antennas, start=1):
            status = "OK" if ant.is_working else "Falha"
            self._item_box(
                f"#{idx} | Qtd: {ant.quantity} | {brand_text(ant.brand)} | Status: {status}"
            )
            if ant.notes:
                self.add_paragraph(f"Obs: {ant.notes}", 5)
            self.y += 2
        self.y += 3

        self.add_subtitle("Firewall")
        self.add_pair("Existe Firewall?", bool_to_text(record.has_firewall))
        if record.has_firewall:
            self.add_pair("Marca", brand_text(record.firewall_brand), 5)
            self.add_pair("Status", "Operacional" if record.firewall_working else "Falha", 5)
            if record.firewall_notes:
                self.add_paragraph(f"Obs: {record.firewall_notes}", 5)

    def _machines(self, record: ChecklistRecord) -> None:
        self.y += 5
        self.add_title("2. Máquinas e Computadores")
        self.add_pair("Todas as máquinas OK?", bool_to_text(record.all_machines_ok))
        if record.all_machines_ok:
            return
        self.y += 3
        bar = (200, 50, 50)
        width = self.content_width - 3
        for idx, pm in enumerate(record.problematic_machines, start=1):
            head = self._split(f"#{idx} | Máquina: {pm.identifier}", FONT_BOLD, 10, width)
            proc = self._split(
                f"Proc: {pm.processor_gen} | Win11: {bool_to_text(pm.os_updated)}", FONT, 9, width
            )
            problem = self._split(f"Problema: {pm.problem_description}", FONT, 9, width)
            self.check_page_break(20)
            self.y += 4
            self._flow(head, MARGIN + 3, 5, font=FONT_BOLD, size=10, bar=bar)
            self._flow(proc, MARGIN + 3, 5, font=FONT, size=9, bar=bar)
            self._flow(problem, MARGIN + 3, 5, font=FONT, size=9, color=ALERT_RED, bar=bar)
            self.y += 3

    def _network_and_satisfaction(self, record: ChecklistRecord) -> None:
        self.y += 5
        self.add_title("3. Pontos de Rede")
        self.add_pair("Estado Geral", "Bons" if record.network_points_ok else "Com defeitos")
        self.add_paragraph(f"Observações: {record.network_points_notes or 'Nenhuma.'}")

        self.y += 5
        self.add_title("4. Satisfação")
        self.add_pair("Usuários Satisfeitos?", bool_to_text(record.employees_satisfied))
        if not record.employees_satisfied:
            self.add_paragraph(f"Reclamações: {record.complaints}", color=ALERT_RED)

    def _conclusion(self, record: ChecklistRecord, conclusion: str) -> None:
        self.check_page_break(50)
        self.draw_line()
        self.add_title("Conclusão Técnica")

        lines = self._split(conclusion, FONT, 10, self.content_width - 10)
        box_height = max(30, len(lines) * 5 + 8)
        self.check_page_break(min(box_height, PAGE_LIMIT - PAGE_TOP))
        start, start_page = self.y, self.page
        self._fill_rect(MARGIN, start, self.content_width, 1, CONCLUSION_FILL)
        self.y += 5
        self._flow(lines, MARGIN + 5, 5, fill=CONCLUSION_FILL)
        bottom = start + box_height if self.page == start_page else self.y
        self._fill_rect(
            MARGIN, self.y - 4, self.content_width, max(3.0, bottom - (self.y - 4)), CONCLUSION_FILL
        )
        self.y = max(self.y, bottom) + 5

        if record.observations:
            self.add_subtitle("Observações Gerais")
            self.add_paragraph(record.observations)

    def _signature(self, record: ChecklistRecord) -> None:
        self.check_page_break(40)
        self.y += 15

        self._rule(MARGIN, MARGIN + 80, self.y, (0, 0, 0), 0.5)
        self._font(FONT_BOLD, 10)
        self._text(record.technician_name, MARGIN, self.y + 5)
        self._font(FONT, 10)
        self._text("Técnico Responsável", MARGIN, self.y + 10)

        box_x = self.page_width - MARGIN - 60
        box_y = self.y - 10
        self.canvas.setStrokeColorRGB(*_rgb((150, 150, 150)))
        self.canvas.setLineWidth(0.2)
        self.canvas.setDash(2 * mm, 2 * mm)
        self.canvas.rect(box_x * mm, self._py(box_y + 30), 60 * mm, 30 * mm, stroke=1, fill=0)
        self.canvas.setDash()
        self._font(FONT, 8, (150, 150, 150))
        self._text("Carimbo", box_x + 30, box_y + 15, align="center")
        self.y += 20

    def draw(self, record: ChecklistRecord, conclusion: str) -> None:
        self._header(record)
        self._infrastructure(record)
        self._machines(record)
        self._network_and_satisfaction(record)
        self._conclusion(record, conclusion)
        self._signature(record)

    @property
    def page_count(self) -> int:
        return self.page

def render_pdf(record: ChecklistRecord, conclusion: str) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(f"Relatório - {record.location_name}")
    c.setAuthor(record.technician_name)
    layout = PdfReportLayout(c)
    layout.draw(record, conclusion)
    c.save()
    return buffer.getvalue()
