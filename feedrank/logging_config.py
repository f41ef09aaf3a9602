"""Logging configuration for feedrank."""
import logging
import logging.handlers
from pathlib import Path

# Loggers that emit one line per feed position at DEBUG
PER_POSITION_LOGGERS = ("feedrank.ranking.diversifier",)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    trace_positions: bool = False,
) -> None:
    """Configure process-wide logging.

    Call once at startup (CLI entry point or the embedding application).
    At DEBUG the per-position diversifier traces stay at INFO unless
    ``trace_positions`` is set.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for rotating file handler
        trace_positions: Keep per-position swap traces at DEBUG
    """
    root = logging.getLogger()

    # Embedding applications usually own the handlers already
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
        )
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    for name in PER_POSITION_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_positions else logging.INFO)
