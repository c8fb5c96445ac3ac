"""
Structured logging для launchpad core

structlog поверх stdlib logging. Математические модули не логируют:
события пишет только orchestration слой (launchpad.engine).
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from structlog.typing import Processor


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    output_file: Optional[str] = None,
) -> None:
    """
    Настройка structured logging.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR)
        format: Формат вывода ("json" или "console")
        output_file: Опциональный путь к файлу логов
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    if output_file:
        log_path = Path(output_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(output_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        logging.root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Получение логгера.

    Args:
        name: Имя логгера (обычно __name__)

    Returns:
        structlog логгер
    """
    return structlog.get_logger(name)
