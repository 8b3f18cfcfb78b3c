import logging
from typing import Optional

from rich.logging import RichHandler

NOISY_LOGGERS = ["asyncio", "urllib3.connectionpool"]


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Rich console output, plus a plain text file when ``log_file`` is set."""
    logging.root.handlers.clear()

    handlers = [
        RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,  # selectors and titles contain square brackets
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=handlers,
        format="%(message)s",
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
