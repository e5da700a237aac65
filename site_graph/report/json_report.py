"""
Генерация JSON-отчёта для проекта SiteGraph.

Сериализация списка PageResult в файл.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from site_graph.crawler.models import PageResult


def results_to_dicts(results: Sequence[PageResult]) -> List[Dict[str, Any]]:
    return [page.to_dict() for page in results]


def render_json(results: Sequence[PageResult], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет результаты обхода в формате JSON по указанному пути.

    :param results: список PageResult
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_graph.report.json_report import render_json
    report_path = render_json(results, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(results_to_dicts(results), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
