#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteGraph через командную строку.

Команды:
  crawl [URL]   Обойти сайт и вывести/сохранить результаты
  config [URL]  Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --timeout SEC         Таймаут загрузки одной страницы
  --concurrency N       Максимум одновременных загрузок
  --source http|browser Источник страниц
  --json PATH           Сохранить JSON-отчёт в файл
  --html PATH           Сохранить HTML-отчёт в файл
  --template DIR        Папка с Jinja2-шаблонами (по умолчанию встроенная)
  --pretty              Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC   Таймаут всего обхода (секунд)
  --filter-url/--filter-title/--filter-description/--filter-heading TEXT
  --status All|200|3xx|404|500|<код>
  --page URL            Подробности одной страницы

Дополнительно:
  --version, -v       Показать версию SiteGraph

Пример:
  site-graph crawl https://example.com --json report.json --concurrency 16
"""
import sys
import asyncio
import json
from pathlib import Path

import click
from jinja2 import TemplateError
from pydantic import ValidationError

from site_graph import __version__
from site_graph.config import load_config
from site_graph.crawler.errors import CrawlError
from site_graph.logger import init_logging, logger
from site_graph.report import (
    STATUS_CHOICES,
    filter_results,
    find_page,
    format_page_details,
    matches_status,
    results_to_dicts,
)
from site_graph.report.html_report import render_html
from site_graph.report.json_report import render_json
from site_graph.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


def _check_status(ctx, param, value):
    try:
        matches_status(200, value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    return value


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteGraph, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteGraph CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--timeout', type=float, default=None, help='Таймаут загрузки одной страницы (секунд)')
@click.option('--concurrency', type=int, default=None, help='Максимум одновременных загрузок')
@click.option(
    '--source', 'page_source',
    type=click.Choice(['http', 'browser']),
    default=None,
    help='Источник страниц: http или browser (Playwright)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (report.html.j2)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Таймаут всего обхода (секунд)')
@click.option('--filter-url', default='', help='Подстрока URL')
@click.option('--filter-title', default='', help='Подстрока заголовка страницы')
@click.option('--filter-description', default='', help='Подстрока описания')
@click.option('--filter-heading', default='', help='Подстрока любого заголовка h1-h6')
@click.option(
    '--status',
    default='All', show_default=True,
    callback=_check_status,
    help=f'Фильтр по статусу: {", ".join(STATUS_CHOICES)} или любой код'
)
@click.option('--page', 'page_url', default=None, help='Показать подробности одной страницы')
@click.pass_context
def crawl(ctx, url, timeout, concurrency, page_source, json_output, html_output, template_dir,
          pretty, crawl_timeout, filter_url, filter_title, filter_description, filter_heading,
          status, page_url):
    """Обойти сайт и вывести или сохранить результаты."""
    cfg = _load(ctx, base_url=url, timeout=timeout, concurrency=concurrency, page_source=page_source)
    logger.debug('Starting crawl with config: %s', cfg.base_url)
    try:
        if crawl_timeout:
            results = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            results = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except CrawlError as e:
        print_error(f'Ошибка при обходе: {e}')

    if page_url:
        page = find_page(results, page_url)
        if page is None:
            print_error(f'Страница не найдена в результатах: {page_url}')
        click.echo(format_page_details(page))
        return

    selected = filter_results(
        results,
        url=filter_url,
        title=filter_title,
        description=filter_description,
        heading=filter_heading,
        status=status,
    )

    # Если не сохраняем в файл, печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(results_to_dicts(selected), ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(selected, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(selected, template_dir, html_output, root_url=str(cfg.base_url))
            click.echo(f'HTML report: {saved_html}')
        except (OSError, TemplateError) as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(ctx, base_url=url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
