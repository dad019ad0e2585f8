# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска LinkScout через командную строку.

Команды:
  crawl SEED_URL [DOMAIN]   Обойти сайт от SEED_URL и вывести ссылки, вернувшие 404
  config                    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --scope-mode MODE   subdomain | exact | fuzzy — как сравнивать хост с DOMAIN
  --concurrency N     Число параллельных воркеров
  --timeout SEC       Таймаут одного запроса (секунд)
  --user-agent STR    Заголовок User-Agent
  --crawl-timeout SEC Таймаут всего обхода (секунд), после него — частичный отчёт
  --json PATH         Сохранить полный JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с шаблоном report.html.j2
  --save-results      Записать список 404 в <results_dir>/<host>.json
  --show-failures     Показать страницы, которые не удалось проверить
  --fail-on-broken    Код выхода 2, если найдены битые ссылки

Пример:
  link-scout crawl https://example.com/ example.com --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from link_scout import __version__
from link_scout.config import CrawlerConfig, load_config
from link_scout.crawler.errors import SeedInvalid
from link_scout.crawler.normalizer import parse_seed
from link_scout.crawler.scope import ScopeMode
from link_scout.logger import DEFAULT_FORMAT, init_logging
from link_scout.report.console import format_listing
from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json, save_results
from link_scout.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
EXIT_BROKEN_FOUND = 2


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд LinkScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed_url')
@click.argument('domain', required=False)
@click.option(
    '--scope-mode', 'scope_mode',
    default=None,
    type=click.Choice([m.value for m in ScopeMode]),
    help='Правило сравнения хоста с DOMAIN (по умолчанию из конфига: subdomain)'
)
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='Число параллельных воркеров')
@click.option('--timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
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
    help='Папка с Jinja2-шаблоном (по умолчанию встроенный)'
)
@click.option('--save-results', 'save', is_flag=True, help='Записать 404 в <results_dir>/<host>.json')
@click.option('--show-failures', is_flag=True, help='Показать страницы, которые не удалось проверить')
@click.option('--fail-on-broken', is_flag=True, help='Код выхода 2, если найдены битые ссылки')
@click.pass_context
def crawl(ctx, seed_url, domain, scope_mode, concurrency, timeout, user_agent, crawl_timeout,
          json_output, html_output, template_dir, save, show_failures, fail_on_broken):
    """Обойти сайт от SEED_URL и вывести ссылки, вернувшие 404.

    DOMAIN ограничивает обход этим доменом (и его поддоменами в режиме subdomain).
    """
    cfg: CrawlerConfig = ctx.obj['config']
    overrides = {
        key: value
        for key, value in (
            ('scope_mode', scope_mode),
            ('concurrency', concurrency),
            ('timeout', timeout),
            ('user_agent', user_agent),
        )
        if value is not None
    }
    if overrides:
        try:
            cfg = CrawlerConfig.model_validate({**cfg.model_dump(), **overrides})
        except ValidationError as e:
            print_error(f'Некорректные параметры: {e}')

    try:
        parse_seed(seed_url)
    except SeedInvalid as e:
        print_error(f'Ошибка: {e}')

    try:
        result = asyncio.run(start_crawl(cfg, seed_url, domain, crawl_timeout=crawl_timeout))
    except SeedInvalid as e:
        print_error(f'Ошибка: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    for line in format_listing(result, show_failures=show_failures):
        click.echo(line)

    if save:
        try:
            saved = save_results(result, cfg.results_dir)
            if saved:
                click.echo(f'Results: {saved}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении результатов: {e}')

    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except (OSError, TypeError) as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(result, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if fail_on_broken and result.broken:
        ctx.exit(EXIT_BROKEN_FOUND)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
