"""site_harvest.report: Отчёты по собранным документам (JSON-payload для индексации и HTML)."""

from __future__ import annotations

from site_harvest.report.html_report import render_html
from site_harvest.report.payload import build_payload, render_json

__all__ = ["build_payload", "render_json", "render_html"]
