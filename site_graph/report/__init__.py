"""site_graph.report: фильтрация результатов и генерация отчётов (JSON и HTML) для CLI."""

from __future__ import annotations

from site_graph.report.filters import (
    STATUS_CHOICES,
    filter_results,
    find_page,
    format_page_details,
    matches_status,
    status_class,
)
from site_graph.report.html_report import render_html
from site_graph.report.json_report import render_json, results_to_dicts

__all__ = [
    "STATUS_CHOICES",
    "filter_results",
    "find_page",
    "format_page_details",
    "matches_status",
    "status_class",
    "render_html",
    "render_json",
    "results_to_dicts",
]
