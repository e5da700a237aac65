"""site_graph.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_graph.crawler.models import HEADING_LEVELS, PageResult
from site_graph.report.filters import status_class

#: шаблоны, поставляемые вместе с пакетом
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def render_html(
    results: Sequence[PageResult],
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
    *,
    root_url: str = "",
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        results: записи PageResult после обхода.
        template_dir: директория с Jinja2-шаблонами, при None берётся встроенный шаблон.
        output_path: путь к итоговому HTML-файлу.
        root_url: корень обхода для заголовка отчёта.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from site_graph.report.html_report import render_html
    html_path = render_html(results, None, 'reports/report.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    env.filters["status_class"] = status_class
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = {
        "root_url": root_url or (results[0].url if results else ""),
        "pages": results,
        "heading_levels": HEADING_LEVELS,
        "failures": sum(1 for page in results if page.is_failure),
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
