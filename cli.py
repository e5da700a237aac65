# cli.py

"""
Точка входа для запуска краулера SiteGraph без установки пакета.

Пример запуска:
    python cli.py crawl https://example.com --json reports/report.json --html reports/report.html
"""
from site_graph.cli import cli


if __name__ == '__main__':
    cli()
