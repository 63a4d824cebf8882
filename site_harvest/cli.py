# === FILE: site_harvest/cli.py ===
#!/usr/bin/env python3
"""
Точка входа SiteHarvest для командной строки.

Команды:
  discover URL  Найти страницы сайта (robots.txt, sitemap, ссылки главной)
  scrape URL    Найти страницы и извлечь из них текст
  config        Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scrape опции:
  --json PATH         Сохранить payload для индексации в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --collection NAME   Имя коллекции (по умолчанию site_<hostname>)
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --harvest-timeout SEC  Таймаут всего сбора (секунд)
  --quiet             Не выводить прогресс

Пример:
  site-harvest scrape https://example.com/docs/ --json payload.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from site_harvest import __version__
from site_harvest.config import load_config
from site_harvest.crawler.discovery import discover_crawl_urls
from site_harvest.engine import start_harvest
from site_harvest.errors import InvalidSeedURLError
from site_harvest.logger import setup_logging
from site_harvest.report import build_payload, render_html, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _progress(url: str, done: int, total: int) -> None:
    click.echo(f'[{done}/{total}] {url}'.rstrip(), err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteHarvest, version %(version)s')
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
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteHarvest CLI."""
    setup_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('discover', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def discover(ctx, url, pretty):
    """Вывести JSON-список страниц сайта, найденных для URL."""
    cfg = ctx.obj['config']
    try:
        urls = asyncio.run(discover_crawl_urls(url, config=cfg))
    except InvalidSeedURLError as e:
        print_error(f'Некорректный URL: {e.url}')
    except Exception as e:
        print_error(f'Ошибка при обнаружении страниц: {e}')
    if not urls:
        print_error('Не найдено ни одной страницы')
    click.echo(json.dumps(urls, ensure_ascii=False, indent=2 if pretty else None))


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить payload для индексации в файл'
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
    help='Папка с Jinja2-шаблоном report.html.j2'
)
@click.option('--collection', 'collection_name', default=None, help='Имя коллекции для индексации')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option(
    '--harvest-timeout', 'harvest_timeout',
    type=float,
    default=None,
    help='Таймаут всего сбора (секунд)'
)
@click.option('--quiet', '-q', is_flag=True, help='Не выводить прогресс')
@click.pass_context
def scrape(ctx, url, json_output, html_output, template_dir, collection_name, pretty, harvest_timeout, quiet):
    """Найти страницы сайта, извлечь текст и сохранить/вывести результат."""
    cfg = ctx.obj['config']
    on_progress = None if quiet else _progress
    try:
        if harvest_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_harvest(url, cfg, on_progress), timeout=harvest_timeout)
            )
        else:
            report = asyncio.run(start_harvest(url, cfg, on_progress))
    except InvalidSeedURLError as e:
        print_error(f'Некорректный URL: {e.url}')
    except asyncio.TimeoutError:
        print_error(f'Сбор не завершён за {harvest_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при сборе: {e}')

    if not report.discovered:
        print_error('Не найдено ни одной страницы')

    payload = build_payload(report.documents, collection_name or report.collection_name)

    # Если не сохраняем в файл, печатаем в stdout
    if not json_output and not html_output:
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2 if pretty else None))
        return

    if json_output:
        try:
            saved_json = render_json(payload, json_output, pretty=pretty)
            click.echo(f'JSON payload: {saved_json}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
