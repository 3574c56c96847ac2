import os
import sys

from loguru import logger

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from log_setup import setup_logger


def test_file_sink_receives_messages(tmp_path):
    log_file = tmp_path / "logs" / "heracles.log"
    setup_logger("debug", str(log_file))
    try:
        logger.debug("workout 7 replaced")
        assert log_file.exists()
        content = log_file.read_text(encoding="utf-8")
        assert "Logger initialized with level=DEBUG" in content
        assert "workout 7 replaced" in content
    finally:
        setup_logger("INFO")
