"""Process-wide configuration.

A Config is built once at startup (Lambda cold start or local server boot)
and passed explicitly to the resolvers, so the core never reads the process
environment on its own.
"""

import logging
import math
import os
from typing import Mapping, Optional

from service_errors import ConfigurationError

DEFAULT_PORT = 8080
DEFAULT_VIACEP_BASE_URL = "https://viacep.com.br"
DEFAULT_WEATHER_API_BASE_URL = "https://api.weatherapi.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_LOG_LEVEL = "INFO"


class Config:
    """Settings for one running instance of the service.

        Attributes:
            weather_api_key: WeatherAPI.com access key. Empty when not configured.
            port: Port the local HTTP listener binds to.
            viacep_base_url: Scheme and host of the ViaCEP service.
            weather_api_base_url: Scheme and host of the WeatherAPI service.
            viacep_timeout: Per-call timeout, in seconds, for ViaCEP requests.
            weather_api_timeout: Per-call timeout, in seconds, for WeatherAPI requests.
            log_level: Name of the root logging level (e.g. 'INFO').
    """
    def __init__(self, weather_api_key: str = "", port: int = DEFAULT_PORT,
                 viacep_base_url: str = DEFAULT_VIACEP_BASE_URL,
                 weather_api_base_url: str = DEFAULT_WEATHER_API_BASE_URL,
                 viacep_timeout: float = DEFAULT_TIMEOUT_SECONDS,
                 weather_api_timeout: float = DEFAULT_TIMEOUT_SECONDS,
                 log_level: str = DEFAULT_LOG_LEVEL):
        self.weather_api_key = weather_api_key
        self.port = port
        self.viacep_base_url = viacep_base_url.rstrip("/")
        self.weather_api_base_url = weather_api_base_url.rstrip("/")
        self.viacep_timeout = viacep_timeout
        self.weather_api_timeout = weather_api_timeout
        self.log_level = log_level.upper()

    def __repr__(self) -> str:
        """Returns a string representation of the Config instance, with the access key masked."""
        return (
            f"{self.__class__.__name__}("
            f"weather_api_key={'***' if self.weather_api_key else ''!r}, "
            f"port={self.port!r}, "
            f"viacep_base_url={self.viacep_base_url!r}, "
            f"weather_api_base_url={self.weather_api_base_url!r}, "
            f"viacep_timeout={self.viacep_timeout!r}, "
            f"weather_api_timeout={self.weather_api_timeout!r}, "
            f"log_level={self.log_level!r})"
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Builds a Config from environment variables.

            Args:
                environ: The mapping to read from. Defaults to os.environ.

            Returns:
                A Config populated from the environment, with defaults for unset variables.

            Raises:
                ConfigurationError: If a numeric variable cannot be parsed, is not finite or is not positive,
                    or LOG_LEVEL is not a logging level name.
        """
        environ = os.environ if environ is None else environ

        return cls(
            weather_api_key=environ.get("WEATHER_API_KEY", "").strip(),
            port=_parse_number(environ, "PORT", DEFAULT_PORT, int),
            viacep_base_url=environ.get("VIACEP_BASE_URL") or DEFAULT_VIACEP_BASE_URL,
            weather_api_base_url=environ.get("WEATHER_API_BASE_URL") or DEFAULT_WEATHER_API_BASE_URL,
            viacep_timeout=_parse_number(environ, "VIACEP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float),
            weather_api_timeout=_parse_number(environ, "WEATHER_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float),
            log_level=_parse_log_level(environ),
        )


def _parse_number(environ: Mapping[str, str], name: str, default, number_type):
    raw_value = environ.get(name)
    if not raw_value:
        return default

    try:
        value = number_type(raw_value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw_value!r}")

    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {raw_value!r}")

    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw_value!r}")

    return value


def _parse_log_level(environ: Mapping[str, str]) -> str:
    log_level = (environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {environ.get('LOG_LEVEL')!r}")

    return log_level
