import json
import logging

import pytest
import structlog

from core.logging_config import get_structured_logger, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_structured_events_render_as_json(restore_logging, capsys):
    setup_logging("info")

    get_structured_logger("assetguard.audit").info("Asset checked out", asset_id="AST-001")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert " - assetguard.audit - INFO - " in line
    event = json.loads(line.split(" - INFO - ", 1)[1])
    assert event["event"] == "Asset checked out"
    assert event["asset_id"] == "AST-001"
    assert event["level"] == "info"


def test_level_filters_and_handlers_do_not_stack(restore_logging, capsys):
    setup_logging("WARNING")
    setup_logging("WARNING")

    assert len(logging.getLogger().handlers) == 1
    get_structured_logger("assetguard.audit").info("dropped")
    logging.getLogger("assetguard.plain").warning("kept %s", "plain")

    out = capsys.readouterr().out
    assert "dropped" not in out
    assert "assetguard.plain - WARNING - kept plain" in out
