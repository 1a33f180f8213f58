#!/usr/bin/env python3
"""
Centralized Configuration Management for the Definition Harvester
Manages word list and output paths, request pacing, and logging settings
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 6.1; WOW64; rv:19.0) Gecko/20100101 Firefox/19.0"
DEFAULT_URL_TEMPLATE = "http://www.google.com/search?q=define:%s"

# Logging Configuration
LOGGING = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}

# Environment variable -> HarvestConfig field
ENV_VARS = {
    'HARVEST_WORDS_FILE': 'words_file',
    'HARVEST_OUTPUT_DIR': 'output_dir',
    'HARVEST_OUTPUT_TEMPLATE': 'output_template',
    'HARVEST_COMPILED_FILE': 'compiled_file',
    'HARVEST_URL_TEMPLATE': 'url_template',
    'HARVEST_USER_AGENT': 'user_agent',
    'HARVEST_JOB_SIZE': 'job_size',
    'HARVEST_DELAY_SECONDS': 'delay_seconds',
    'HARVEST_TIMEOUT': 'timeout',
    'HARVEST_MAX_ATTEMPTS': 'max_attempts',
    'HARVEST_DEFAULT_CHARSET': 'default_charset',
    'HARVEST_MARKER_CLASS': 'marker_class',
    'HARVEST_LIST_TAG': 'list_tag',
    'HARVEST_PLAIN_TEXT': 'plain_text',
    'HARVEST_DEBUG_DUMP_DIR': 'debug_dump_dir',
    'HARVEST_LOG_LEVEL': 'log_level',
    'HARVEST_LOG_FILE': 'log_file',
}


@dataclass
class HarvestConfig:
    """Harvester configuration with validation"""
    words_file: str = 'words.txt'
    output_dir: str = '.'
    output_template: str = 'words_goog_json_{job}.txt'
    compiled_file: str = 'words_goog_compiled.txt'
    url_template: str = DEFAULT_URL_TEMPLATE
    user_agent: str = DEFAULT_USER_AGENT
    job_size: int = 2271
    delay_seconds: float = 2.0
    timeout: float = 30
    max_attempts: int = 3
    default_charset: str = 'ISO-8859-1'
    marker_class: str = 'dict'
    list_tag: str = 'ol'
    plain_text: bool = False
    debug_dump_dir: Optional[str] = None
    log_level: str = LOGGING['level']
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization"""
        if self.job_size < 1:
            raise ValueError("Job size must be a positive integer")
        if self.delay_seconds < 0:
            raise ValueError("Delay between requests cannot be negative")
        if self.timeout <= 0:
            raise ValueError("Request timeout must be positive")
        if self.max_attempts < 1:
            raise ValueError("At least one request attempt is required")
        if '{job}' not in self.output_template:
            raise ValueError("Output template must contain a {job} placeholder")
        if '%s' not in self.url_template:
            raise ValueError("URL template must contain a %s placeholder")
        if not self.marker_class or not self.list_tag:
            raise ValueError("Marker class and list tag are required")

    def output_path_for(self, job_number: int) -> Path:
        """Deterministic output file for a job number"""
        return Path(self.output_dir) / self.output_template.format(job=job_number)

    def compiled_path(self) -> Path:
        return Path(self.output_dir) / self.compiled_file

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(field_name: str, raw: str) -> Any:
    """Convert an environment string to the field's type"""
    field_type = {f.name: f.type for f in fields(HarvestConfig)}[field_name]
    if field_type in ('int', int):
        return int(raw)
    if field_type in ('float', float):
        return float(raw)
    if field_type in ('bool', bool):
        return raw.strip().lower() in ('1', 'true', 'yes', 'on')
    return raw


def _from_file(field_name: str, value: Any) -> Any:
    """Check a JSON config value against the field's type, converting numeric strings"""
    field_type = {f.name: f.type for f in fields(HarvestConfig)}[field_name]
    if field_type in (int, float, bool) and isinstance(value, str):
        try:
            return _coerce(field_name, value)
        except ValueError:
            raise ValueError(f"Config key {field_name!r} must be {field_type.__name__}, got {value!r}") from None

    if value is None and field_type == Optional[str]:
        return value
    if field_type is bool:
        ok = isinstance(value, bool)
    elif field_type in (int, float):
        numeric = int if field_type is int else (int, float)
        ok = isinstance(value, numeric) and not isinstance(value, bool)
    else:
        ok = isinstance(value, str)
    if not ok:
        expected = field_type.__name__ if field_type in (int, float, bool) else 'str'
        raise ValueError(f"Config key {field_name!r} must be {expected}, got {value!r}")
    return value


class ConfigManager:
    """Configuration manager with environment variable support"""

    def __init__(self, config_file: Optional[Path] = None):
        self._config: Optional[HarvestConfig] = None
        self._explicit_file = Path(config_file) if config_file is not None else None

    @property
    def _config_file(self) -> Path:
        if self._explicit_file is not None:
            return self._explicit_file
        return Path(os.getenv('HARVEST_CONFIG_FILE', 'harvest_config.json'))

    def get_config(self) -> HarvestConfig:
        """
        Get harvester configuration from multiple sources in priority order:
        1. Environment variables
        2. harvest_config.json file
        3. Default values
        """
        if self._config is None:
            self._config = self._load_config()

        return self._config

    def reset(self):
        self._config = None

    def _load_config(self) -> HarvestConfig:
        values: Dict[str, Any] = {}

        if self._config_file.exists():
            logger.info(f"Loading harvester config from {self._config_file}")
            values.update(self._load_from_file())

        env_values = self._load_from_environment()
        if env_values:
            logger.info(f"Applying {len(env_values)} harvester settings from environment variables")
            values.update(env_values)

        return HarvestConfig(**values)

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration values from JSON file"""
        with open(self._config_file, 'r', encoding='utf-8') as f:
            config_data = json.load(f)

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {self._config_file} must hold a JSON object")
        known = {f.name for f in fields(HarvestConfig)}
        harvest_data = config_data.get('harvest', config_data)
        if not isinstance(harvest_data, dict):
            raise ValueError(f"'harvest' section of {self._config_file} must be a JSON object")
        unknown = set(harvest_data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return {k: _from_file(k, v) for k, v in harvest_data.items() if k in known}

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables"""
        values = {}
        for env_var, field_name in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw:
                values[field_name] = _coerce(field_name, raw)
        return values


# Global configuration manager instance
config_manager = ConfigManager()


def get_config() -> HarvestConfig:
    """Get the harvester configuration"""
    return config_manager.get_config()


def reset_config():
    """Forget the cached configuration so the next call reloads it"""
    config_manager.reset()


def setup_logging(level: str = LOGGING['level'], log_file: Optional[str] = None):
    """Configure console (and optional file) logging for the harvester"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOGGING['format'],
        handlers=handlers,
        force=True,
    )
