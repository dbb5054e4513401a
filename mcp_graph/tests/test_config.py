"""
Settings and logger setup tests
"""

import logging

import pytest

from mcp_graph.config import Settings, load_env_file
from mcp_graph.utils.logger import setup_logger

ENV_VARS = (
    "READ_ONLY", "MS365_MCP_ORG_MODE", "ENABLED_TOOLS", "MS365_MCP_GRAPH_BASE_URL",
    "MS365_MCP_REQUEST_TIMEOUT", "LOG_LEVEL", "LOG_FILE", "SILENT",
    "MS365_MCP_HTTP_HOST", "MS365_MCP_HTTP_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings['read_only'] is False
        assert settings['org_mode'] is False
        assert settings['enabled_tools'] is None
        assert settings['graph_base_url'] == "https://graph.microsoft.com/v1.0"
        assert settings['http_port'] == 3000

    def test_environment_conversion(self, monkeypatch):
        monkeypatch.setenv("READ_ONLY", "true")
        monkeypatch.setenv("MS365_MCP_ORG_MODE", "0")
        monkeypatch.setenv("MS365_MCP_HTTP_PORT", "8080")
        monkeypatch.setenv("ENABLED_TOOLS", "mail|calendar")

        settings = Settings()

        assert settings['read_only'] is True
        assert settings['org_mode'] is False
        assert settings['http_port'] == 8080
        assert settings['enabled_tools'] == "mail|calendar"

    def test_bad_integer_keeps_default(self, monkeypatch):
        monkeypatch.setenv("MS365_MCP_REQUEST_TIMEOUT", "soon")
        assert Settings()['request_timeout'] == 60

    def test_explicit_values_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("READ_ONLY", "true")
        settings = Settings({'read_only': None, 'org_mode': True})

        assert settings['read_only'] is True
        assert settings['org_mode'] is True

    def test_validate_resets_invalid_values(self):
        settings = Settings({'log_level': 'LOUD', 'http_port': -1})

        warnings = settings.validate()['warnings']

        assert len(warnings) == 2
        assert settings['log_level'] == 'INFO'
        assert settings['http_port'] == 3000

    def test_get_and_set(self):
        settings = Settings()
        settings.set('silent', True)
        assert settings.get('silent') is True
        assert settings.get('missing', 'x') == 'x'


def test_env_file_with_bom(tmp_path, monkeypatch):
    path = tmp_path / ".env"
    path.write_bytes("\ufeffENABLED_TOOLS=mail\n".encode("utf-8"))
    # Registers ENABLED_TOOLS with monkeypatch so the loaded value is removed afterwards
    monkeypatch.setenv("ENABLED_TOOLS", "")
    monkeypatch.delenv("ENABLED_TOOLS")

    assert load_env_file(path) is True
    assert Settings()['enabled_tools'] == "mail"


class TestSetupLogger:

    def test_console_and_file(self, tmp_path):
        log_file = tmp_path / "logs" / "server.log"
        logger = setup_logger("mcp_graph.test.file", level="debug", log_file=str(log_file))

        logger.debug("hello")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_silent_leaves_null_handler(self):
        logger = setup_logger("mcp_graph.test.silent", silent=True)
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]

    def test_noisy_loggers_lowered(self):
        setup_logger("mcp_graph.test.noisy", silent=True)
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
