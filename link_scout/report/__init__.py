"""link_scout.report: отчёты по результатам обхода (консоль, JSON, HTML)."""

from link_scout.report.console import format_listing
from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json, save_results

__all__ = ["format_listing", "render_json", "render_html", "save_results"]
