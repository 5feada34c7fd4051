"""
snapmac Configuration

Process-wide settings for the AppArmor profile manager: the loader helper
command, the profile cache location handed to it, and the kernel's live
profile listing. Values are validated with Pydantic and may be read from a
YAML file or overridden through the environment.
"""

import os
import logging
import threading
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger('snapmac.config')

# Defaults used by snapd on Ubuntu systems
DEFAULT_PARSER_COMMAND = "apparmor_parser"
DEFAULT_CACHE_DIR = "/var/cache/apparmor"
DEFAULT_PROFILES_PATH = "/sys/kernel/security/apparmor/profiles"

# Environment overrides: variable -> field
ENV_OVERRIDES = {
    "SNAPMAC_PARSER": "parser_command",
    "SNAPMAC_CACHE_DIR": "cache_dir",
    "SNAPMAC_PROFILES_PATH": "profiles_path",
}


class AppArmorConfig(BaseModel):
    """Locations and commands used when managing AppArmor profiles"""
    parser_command: str = Field(DEFAULT_PARSER_COMMAND, description="Loader helper executable")
    cache_dir: str = Field(DEFAULT_CACHE_DIR, description="Passed to the helper as --cache-loc")
    profiles_path: str = Field(DEFAULT_PROFILES_PATH, description="Kernel profile-status listing")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator('parser_command', 'cache_dir', 'profiles_path')
    @classmethod
    def validate_not_empty(cls, v):
        """Reject blank values"""
        if not v or not v.strip():
            raise ValueError("value must not be empty")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppArmorConfig':
        """
        Create from dictionary

        Args:
            data: Mapping of field names to values

        Returns:
            AppArmorConfig instance

        Raises:
            ConfigError: If the values do not validate
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"invalid apparmor configuration: {e}") from e

    @classmethod
    def from_file(cls, path: str) -> 'AppArmorConfig':
        """
        Load configuration from a YAML file

        The settings may sit at the top level of the document or under an
        ``apparmor`` key.

        Args:
            path: Path to YAML file

        Returns:
            AppArmorConfig instance
        """
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read configuration {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot parse configuration {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"configuration {path} must be a mapping")
        if 'apparmor' in data:
            data = data['apparmor'] or {}
            if not isinstance(data, dict):
                raise ConfigError(f"'apparmor' section of {path} must be a mapping")

        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, base: Optional['AppArmorConfig'] = None,
                 environ: Optional[Dict[str, str]] = None) -> 'AppArmorConfig':
        """
        Apply SNAPMAC_* environment overrides on top of a base configuration

        Args:
            base: Configuration to start from (defaults when omitted)
            environ: Environment mapping (os.environ when omitted)

        Returns:
            AppArmorConfig instance
        """
        base = base or cls()
        environ = os.environ if environ is None else environ
        overrides = {}
        for var, field in ENV_OVERRIDES.items():
            if environ.get(var):
                overrides[field] = environ[var]
        if not overrides:
            return base
        return base.with_overrides(**overrides)

    def with_overrides(self, **changes) -> 'AppArmorConfig':
        """Return a copy with the given fields replaced; None values are ignored"""
        changes = {k: v for k, v in changes.items() if v is not None}
        data = self.model_dump()
        data.update(changes)
        return self.from_dict(data)


# Process-wide default, set once at start-up or by tests
_default_config: Optional[AppArmorConfig] = None
_config_lock = threading.Lock()


def get_default_config() -> AppArmorConfig:
    """Get the process default configuration, building it from the environment on first use"""
    global _default_config
    with _config_lock:
        if _default_config is None:
            _default_config = AppArmorConfig.from_env()
        return _default_config


def set_default_config(config: AppArmorConfig):
    """Replace the process default configuration"""
    global _default_config
    with _config_lock:
        _default_config = config


def reset_default_config():
    """Forget the process default so it is rebuilt on next use"""
    set_default_config(None)
