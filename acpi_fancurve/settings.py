"""Runtime configuration for the fan curve tool.

Settings are read once from the environment, validated with a voluptuous
schema and passed explicitly to the components that need them.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import voluptuous as vol

from .const import (
    CALL_FILE,
    CONFIG_FILE,
    DEFAULT_FALLBACK_ADDRESSES,
    DEFAULT_FALLBACK_TEMPS,
    ENV_CALL_FILE,
    ENV_CONFIG_FILE,
    ENV_FALLBACK_ADDRESSES,
    ENV_FALLBACK_TEMPS,
    ENV_IDENTITY_FILE,
    ENV_MODEL_DB,
    ENV_PREFIX,
    IDENTITY_FILE,
    MODEL_DB,
)
from .errors import ConfigurationError
from .validation import find_violation, parse_non_negative, split_temperatures

_LOGGER = logging.getLogger(__name__)


def _integer_list(value: str) -> tuple[int, ...]:
    """Parse a space-joined list of non-negative integers."""
    tokens = split_temperatures(str(value))
    if not tokens:
        raise vol.Invalid("expected at least one integer")
    parsed = [parse_non_negative(token) for token in tokens]
    if any(v is None for v in parsed):
        raise vol.Invalid(f"expected non-negative integers, got '{value}'")
    return tuple(parsed)


def _non_decreasing(value: tuple[int, ...]) -> tuple[int, ...]:
    reason = find_violation(value, len(value))
    if reason is not None:
        raise vol.Invalid(reason)
    return value


_PATH = vol.All(str, vol.Length(min=1))

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(ENV_FALLBACK_ADDRESSES, default=DEFAULT_FALLBACK_ADDRESSES): _integer_list,
        vol.Optional(ENV_FALLBACK_TEMPS, default=DEFAULT_FALLBACK_TEMPS): vol.All(
            _integer_list, _non_decreasing
        ),
        vol.Optional(ENV_MODEL_DB, default=MODEL_DB): _PATH,
        vol.Optional(ENV_CONFIG_FILE, default=CONFIG_FILE): _PATH,
        vol.Optional(ENV_CALL_FILE, default=CALL_FILE): _PATH,
        vol.Optional(ENV_IDENTITY_FILE, default=IDENTITY_FILE): _PATH,
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class Settings:
    """Configuration resolved once at startup.

    Attributes:
        fallback_addresses: Base addresses used for hosts missing from the database.
        fallback_temps: Default temperatures used for hosts missing from the database.
        model_db_path: Path of the model database file.
        config_path: Path of the persisted temperature file.
        call_file: Path of the firmware call interface.
        identity_file: Path the host identity string is read from.
    """

    fallback_addresses: tuple[int, ...] = _integer_list(DEFAULT_FALLBACK_ADDRESSES)
    fallback_temps: tuple[int, ...] = _integer_list(DEFAULT_FALLBACK_TEMPS)
    model_db_path: str = MODEL_DB
    config_path: str = CONFIG_FILE
    call_file: str = CALL_FILE
    identity_file: str = IDENTITY_FILE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Create settings from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        if environ is None:
            environ = os.environ
        data = {k: v for k, v in environ.items() if k.startswith(ENV_PREFIX)}

        try:
            validated = SETTINGS_SCHEMA(data)
        except vol.Invalid as err:
            raise ConfigurationError(f"Invalid configuration: {err}") from err

        settings = cls(
            fallback_addresses=validated[ENV_FALLBACK_ADDRESSES],
            fallback_temps=validated[ENV_FALLBACK_TEMPS],
            model_db_path=validated[ENV_MODEL_DB],
            config_path=validated[ENV_CONFIG_FILE],
            call_file=validated[ENV_CALL_FILE],
            identity_file=validated[ENV_IDENTITY_FILE],
        )
        _LOGGER.debug("Settings resolved: %s", settings)
        return settings
