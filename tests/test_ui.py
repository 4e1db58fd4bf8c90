import pytest
from rich.console import Console

from core.config import Config
from ui import log_utils
from ui.console import ConsoleLogger
from ui.dashboard import Dashboard


@pytest.fixture
def log_file(tmp_path, monkeypatch):
    path = tmp_path / "logs" / "relay.log"
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", path)
    return path


def test_write_cli_log_appends_lines(log_file):
    log_utils.write_cli_log("STARTUP", "Relay started", port=8000)
    log_utils.write_cli_log("SHUTDOWN", "Relay stopped")

    lines = log_file.read_text().splitlines()
    assert lines[0].endswith("STARTUP: Relay started port=8000")
    assert lines[1].endswith("SHUTDOWN: Relay stopped")


def test_clear_logs(log_file):
    log_utils.write_cli_log("INFO", "old")
    log_utils.clear_logs()
    assert log_file.read_text() == ""


def test_console_logger_prints_events(log_file):
    console = Console(record=True, width=200)
    logger = ConsoleLogger(console)

    logger.log_request("GET", "/openai/v1/models")
    logger.log_header("Authorization", "***")
    logger.log_forward("/openai", "https://api.openai.com/v1/models")
    logger.log_response("https://api.openai.com/v1/models", 200)
    logger.log_not_found("/nope")
    logger.log_error("https://api.x.ai/v1", "connection refused")

    text = console.export_text()
    assert "Received request: GET /openai/v1/models" in text
    assert "Forwarding header: Authorization: ***" in text
    assert "Forwarding request to: https://api.openai.com/v1/models" in text
    assert "No matching prefix found for path: /nope" in text
    assert "Failed to fetch https://api.x.ai/v1: connection refused" in text
    assert "ERROR: connection refused" in log_file.read_text()


def test_dashboard_tracks_counts(log_file):
    dashboard = Dashboard(Config())

    dashboard.log_request("POST", "/openai/v1/chat/completions")
    dashboard.log_forward("/openai", "https://api.openai.com/v1/chat/completions")
    dashboard.log_response("https://api.openai.com/v1/chat/completions", 200)
    dashboard.log_request("GET", "/nope?x=1")
    dashboard.log_not_found("/nope")
    dashboard.log_request("GET", "/xai/v1/models")
    dashboard.log_forward("/xai", "https://api.x.ai/v1/models")
    dashboard.log_error("https://api.x.ai/v1/models", "timed out")

    assert dashboard._counts == {"total": 3, "not_found": 1, "errors": 1}
    assert dashboard._prefix_count["/openai"] == 1
    assert dashboard._prefix_count["/xai"] == 1
    assert [info.status for info in dashboard._recent] == [500, 404, 200]
    assert dashboard._errors == ["https://api.x.ai/v1/models: timed out"]
    # Layout renders without a live display
    Console(file=None, record=True).print(dashboard._build_layout())
