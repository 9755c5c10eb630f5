"""Write rendered reports to disk."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from utils.timefmt import now_local

from ..models import ReportBundle
from .common import report_filename
from .document_report import render_document
from .pdf_report import render_pdf
from .text_report import render_text

logger = logging.getLogger(__name__)

FORMATS = ("pdf", "doc", "txt")


def _render(bundle: ReportBundle, fmt: str) -> bytes:
    renderers: dict[str, Callable[..., object]] = {
        "txt": render_text,
        "doc": render_document,
        "pdf": render_pdf,
    }
    try:
        renderer = renderers[fmt]
    except KeyError:
        raise ValueError(f"Unsupported report format: {fmt}") from None
    output = renderer(bundle.record, bundle.conclusion)
    if isinstance(output, str):
        return output.encode("utf-8")
    if not isinstance(output, bytes):
        raise TypeError(f"{fmt} renderer returned {type(output).__name__}")
    return output


def export_report(
    bundle: ReportBundle,
    fmt: str,
    out_dir: Path | str,
    now: Optional[datetime] = None,
) -> Path:
    """Render ``bundle`` as ``fmt`` into ``out_dir`` and return the file path.

    Only the text export carries a generation timestamp in its name; the
    other formats overwrite the previous export for the same location.
    """
    data = _render(bundle, fmt)
    stamp = (now or now_local()) if fmt == "txt" else None
    target = Path(out_dir) / report_filename(bundle.record.location_name, fmt, stamp)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    logger.info("Exported %s report to %s", fmt, target)
    return target


__all__ = ["export_report", "FORMATS"]
