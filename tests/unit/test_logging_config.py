"""Tests for logging setup."""
import logging
import logging.handlers
from contextlib import contextmanager

from feedrank.logging_config import PER_POSITION_LOGGERS, setup_logging


@contextmanager
def bare_root():
    """Root logger without handlers for the duration of the block.

    Used inside the test body: pytest attaches its capture handlers to the
    root logger for the test call, so a fixture cannot clear them.
    """
    root = logging.getLogger()
    original_handlers = root.handlers.copy()
    original_level = root.level
    original_levels = {name: logging.getLogger(name).level for name in PER_POSITION_LOGGERS}
    root.handlers = []
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = original_handlers
        root.setLevel(original_level)
        for name, level in original_levels.items():
            logging.getLogger(name).setLevel(level)


class TestSetupLogging:
    """Test logging setup."""

    def test_configures_root_logger(self):
        with bare_root() as root:
            setup_logging(level="WARNING")

            assert root.level == logging.WARNING
            assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)

    def test_idempotent(self):
        """Calling setup_logging twice should not add duplicate handlers."""
        with bare_root() as root:
            setup_logging(level="INFO")
            count_after_first = len(root.handlers)
            setup_logging(level="INFO")
            assert len(root.handlers) == count_after_first == 1

    def test_unknown_level_falls_back_to_info(self):
        with bare_root() as root:
            root.setLevel(logging.ERROR)
            setup_logging(level="chatty")
            assert root.level == logging.INFO

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "feedrank.log"
        with bare_root() as root:
            setup_logging(level="DEBUG", log_file=str(log_file))

            file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].maxBytes == 5 * 1024 * 1024
        assert log_file.parent.is_dir()

    def test_existing_handlers_left_alone(self):
        with bare_root() as root:
            handler = logging.NullHandler()
            root.addHandler(handler)
            root.setLevel(logging.ERROR)

            setup_logging(level="DEBUG")

            assert root.handlers == [handler]
            assert root.level == logging.ERROR


class TestPerPositionTraces:
    """Tests for the diversifier trace level."""

    def test_quieted_by_default(self):
        with bare_root():
            setup_logging(level="DEBUG")

            diversifier_logger = logging.getLogger("feedrank.ranking.diversifier")
            assert diversifier_logger.level == logging.INFO
            assert not diversifier_logger.isEnabledFor(logging.DEBUG)
            assert logging.getLogger("feedrank.scoring.feed_scorer").isEnabledFor(logging.DEBUG)

    def test_enabled_on_request(self):
        with bare_root():
            setup_logging(level="DEBUG", trace_positions=True)

            assert logging.getLogger("feedrank.ranking.diversifier").isEnabledFor(logging.DEBUG)
