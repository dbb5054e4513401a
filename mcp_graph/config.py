"""Server settings and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes")


def load_env_file(env_path: Optional[os.PathLike] = None) -> bool:
    """Load .env from the given path or the current directory

    utf-8-sig handles files saved with a Windows BOM.
    """
    path = Path(env_path) if env_path else Path.cwd() / ".env"
    return load_dotenv(path, encoding="utf-8-sig")


class Settings:
    """Server settings manager."""

    DEFAULTS = {
        # Tool selection
        'read_only': False,
        'org_mode': False,
        'enabled_tools': None,  # regex, case-insensitive

        # Graph
        'graph_base_url': 'https://graph.microsoft.com/v1.0',
        'request_timeout': 60,

        # Logging
        'log_level': 'INFO',
        'log_file': None,
        'silent': False,

        # HTTP transport
        'http_host': '127.0.0.1',
        'http_port': 3000,
    }

    INT_KEYS = ('request_timeout', 'http_port')
    BOOL_KEYS = ('read_only', 'org_mode', 'silent')

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize settings.

        Args:
            config: Explicit values (CLI flags); applied last
        """
        self.config = self.DEFAULTS.copy()

        self._load_from_env()

        if config:
            self.config.update({k: v for k, v in config.items() if v is not None})

    def _load_from_env(self):
        """Load settings from environment variables."""
        env_mappings = {
            'READ_ONLY': 'read_only',
            'MS365_MCP_ORG_MODE': 'org_mode',
            'ENABLED_TOOLS': 'enabled_tools',
            'MS365_MCP_GRAPH_BASE_URL': 'graph_base_url',
            'MS365_MCP_REQUEST_TIMEOUT': 'request_timeout',
            'LOG_LEVEL': 'log_level',
            'LOG_FILE': 'log_file',
            'SILENT': 'silent',
            'MS365_MCP_HTTP_HOST': 'http_host',
            'MS365_MCP_HTTP_PORT': 'http_port',
        }

        for env_var, config_key in env_mappings.items():
            value = os.environ.get(env_var)
            if not value:
                continue

            if config_key in self.INT_KEYS:
                try:
                    value = int(value)
                except ValueError:
                    logger.warning(f"Ignoring {env_var}={value!r}: not an integer")
                    continue
            elif config_key in self.BOOL_KEYS:
                value = value.lower() in _TRUE_VALUES

            self.config[config_key] = value

    def validate(self) -> Dict[str, Any]:
        """Validate configuration.

        Invalid values are reset to their defaults.

        Returns:
            Validation results with warnings
        """
        results = {'valid': True, 'warnings': []}

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if str(self.config['log_level']).upper() not in valid_log_levels:
            results['warnings'].append('Invalid log_level, using INFO')
            self.config['log_level'] = 'INFO'

        for key in self.INT_KEYS:
            if not isinstance(self.config[key], int) or self.config[key] <= 0:
                results['warnings'].append(f'{key} must be a positive integer, using {self.DEFAULTS[key]}')
                self.config[key] = self.DEFAULTS[key]

        return results

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value

    def __getitem__(self, key: str) -> Any:
        return self.config[key]

    def __setitem__(self, key: str, value: Any):
        self.config[key] = value
