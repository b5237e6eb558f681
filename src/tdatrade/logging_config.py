from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


DEFAULT_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FMT = "%(asctime)s | %(levelname)s | %(message)s"


def setup(
    log_dir: str = "logs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    filename: str = "tdatrade.log",
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> None:
    root = logging.getLogger()
    # 중복 핸들러 방지
    if getattr(root, "_tdatrade_logging_installed", False):
        return

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    root.setLevel(logging.DEBUG)

    # 콘솔은 stderr: stdout은 주문 문자열 출력용
    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(CONSOLE_FMT))
    root.addHandler(ch)

    fh = RotatingFileHandler(
        Path(log_dir) / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    fh.setLevel(file_level)
    fh.setFormatter(logging.Formatter(DEFAULT_FMT))
    root.addHandler(fh)

    for name in ("validator", "preparer", "cli"):
        logging.getLogger(name).setLevel(logging.DEBUG)

    root._tdatrade_logging_installed = True  # type: ignore[attr-defined]
