# FILE: tests/test_logging.py
import json
from pathlib import Path

from loguru import logger

from static_gallery.utils.logging import setup_logging


def test_file_sink_writes_json_lines(tmp_path: Path):
    setup_logging('info', serialize_to_file=True, log_dir=tmp_path)
    try:
        logger.bind(collection='trip').info('コレクションの画像生成を開始')
    finally:
        logger.remove()

    (log_file,) = tmp_path.glob('static-gallery_*.jsonl')
    records = [json.loads(line) for line in log_file.read_text(encoding='utf-8').splitlines()]
    # ファイル側にはDEBUGも残る
    assert records[0]['record']['level']['name'] == 'DEBUG'
    assert records[-1]['record']['extra']['collection'] == 'trip'


def test_console_only_by_default(tmp_path: Path):
    setup_logging('DEBUG', log_dir=tmp_path)
    logger.remove()
    assert list(tmp_path.iterdir()) == []
