# FILE: src/static_gallery/utils/logging.py
from pathlib import Path

from loguru import logger
from rich.logging import RichHandler

LOG_DIRECTORY = Path('logs')


def setup_logging(
    level: str = 'INFO',
    serialize_to_file: bool = False,
    log_dir: Path = LOG_DIRECTORY,
) -> None:
    """
    コンソールには RichHandler 経由で人間向けのログを、
    serialize_to_file が真なら log_dir に1実行1ファイルのJSON Linesを出力します。
    """
    level = level.upper()
    logger.remove()

    # 書式は RichHandler 側で付ける。バインドした値はJSON側にのみ現れる
    logger.add(
        RichHandler(rich_tracebacks=True, show_path=False, markup=False),
        level=level,
        format='{message}',
        backtrace=False,
        diagnose=False,
    )

    if serialize_to_file:
        logger.add(
            log_dir / 'static-gallery_{time:YYYYMMDD_HHmmss}.jsonl',
            level='DEBUG',
            serialize=True,
            retention=10,
            encoding='utf-8',
        )

    logger.bind(level=level, log_dir=str(log_dir) if serialize_to_file else None).debug(
        'ログ出力を初期化しました。'
    )
