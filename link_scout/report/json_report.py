# link_scout/report/json_report.py

"""
Генерация JSON-отчётов для проекта LinkScout.

render_json   — полный CrawlResult (битые ссылки, непроверенные страницы, статистика);
save_results  — файл результатов ``<results_dir>/<host>.json`` со списком 404.
"""
import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from link_scout.crawler.models import CrawlResult
from link_scout.logger import logger


def render_json(result: CrawlResult, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт result в формате JSON по указанному пути.

    :param result: объект CrawlResult
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо компактного вывода
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output


def save_results(result: CrawlResult, results_dir: Path | str) -> Optional[Path]:
    """
    Пишет список битых ссылок в ``results_dir/<host>.json``.

    Файл создаётся только если найдена хотя бы одна 404; иначе возвращает None.
    """
    if not result.broken:
        logger.info("No 404s found")
        return None
    host = urlsplit(result.seed).hostname or "results"
    output = Path(results_dir) / f"{host}.json"
    output.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Saving %d 404 url(s) to %s", len(result.broken), output)
    data = [asdict(link) for link in result.broken]
    output.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')
    return output
