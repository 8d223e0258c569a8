"""WeatherAPI Service Provider Module.

This module implements the integration with the WeatherAPI.com service.
It provides functional utilities for fetching real-time weather data,
structured data models for internal consumption, and a specialized
exception hierarchy to handle API-specific failure modes.

The module follows a clean separation of concerns:
    1. Exception handling for configuration, network, status and parse errors.
    2. Data modeling via the WeatherApiResponse class.
    3. API interaction through the fetch_data_weather_api function.
"""

import logging
from typing import Any, Optional

import requests

from config import Config
from service_errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class WeatherApiError(UpstreamError):
    """Base exception for errors originating from the WeatherAPI service."""
    pass


class WeatherApiConfigurationError(ConfigurationError):
    """Raised when no WeatherAPI access key is configured; no request is attempted."""
    pass


class WeatherApiConnectionError(WeatherApiError):
    """Raised when a network or transport-level error occurs during an API request.

        Attributes:
            error: The underlying requests exception that triggered this error.
    """
    def __init__(self, error: requests.exceptions.RequestException):
        """Initializes the error with the original requests exception.

                Args:
                    error: The source RequestException.
        """
        super().__init__(error)
        self.error = error

    def __repr__(self):
        """Returns a string representation of the WeatherApiConnectionError instance, including the wrapped error."""
        return f"{self.__class__.__name__}({repr(self.error)})"


class WeatherApiStatusError(WeatherApiError):
    """Raised when WeatherAPI answers with a non-success status code.

        Attributes:
            status_code: The HTTP status code returned by WeatherAPI.
            details: The decoded error body, or None if it could not be decoded.
    """
    def __init__(self, status_code: int, details: Optional[Any] = None):
        super().__init__(status_code, details)
        self.status_code = status_code
        self.details = details

    def __repr__(self):
        """Returns a string representation of the WeatherApiStatusError instance."""
        return f"{self.__class__.__name__}(status_code={self.status_code!r}, details={self.details!r})"


class WeatherApiParseError(WeatherApiError):
    """Raised when a WeatherAPI response body cannot be decoded into a temperature.

        Attributes:
            error: The underlying decoding exception.
    """
    def __init__(self, error: Exception):
        super().__init__(error)
        self.error = error

    def __repr__(self):
        """Returns a string representation of the WeatherApiParseError instance, including the wrapped error."""
        return f"{self.__class__.__name__}({repr(self.error)})"


class WeatherApiResponse:
    """A data container for weather information retrieved from WeatherAPI.

        Attributes:
            city_name: Name of the location WeatherAPI matched (e.g., 'Sao Paulo').
            region: Region or state of the matched location.
            country_name: Name of the country.
            last_update_epoch: The time of the last weather update (on WeatherApi's end) in Unix epoch format.
            temp_c: Current temperature in degrees Celsius.
    """
    def __init__(self, city_name: Optional[str], region: Optional[str], country_name: Optional[str],
                 last_update_epoch: Optional[int], temp_c: float):
        """Initializes a WeatherApiResponse instance with data from WeatherAPI.

                Args:
                    city_name: The name of the matched location.
                    region: The region or state of the matched location.
                    country_name: The name of the country (e.g., 'Brazil').
                    last_update_epoch: The Unix timestamp (seconds) of the last
                        weather data update.
                    temp_c: The temperature measured in degrees Celsius.
        """
        self.city_name = city_name
        self.region = region
        self.country_name = country_name
        self.last_update_epoch = last_update_epoch
        self.temp_c = temp_c

    def __repr__(self) -> str:
        """Returns a string representation of the WeatherApiResponse instance."""
        return (
            f"{self.__class__.__name__}("
            f"city_name={self.city_name!r}, "
            f"region={self.region!r}, "
            f"country_name={self.country_name!r}, "
            f"last_update_epoch={self.last_update_epoch!r}, "
            f"temp_c={self.temp_c!r})"
        )


def _decode_error_details(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def fetch_data_weather_api(location: str, config: Config) -> WeatherApiResponse:
    """Fetches real-time weather data from the WeatherAPI service.

        Connects to the WeatherAPI current-conditions endpoint to retrieve the
        current temperature in Celsius for a location. The location is sent
        percent-encoded, since it contains a comma and often non-ASCII
        characters (e.g., 'São Paulo,SP'). A single request is made.

        Args:
            location: The 'City,ST' query for the location.
            config: The service configuration (access key, base URL and timeout).

        Returns:
            A WeatherApiResponse object populated with the current temperature.

        Raises:
            WeatherApiConfigurationError: If no access key is configured.
            WeatherApiConnectionError: If a network error occurs.
            WeatherApiStatusError: If the API returns a non-success status code.
            WeatherApiParseError: If the body is not JSON or has no numeric current.temp_c.
    """
    if not config.weather_api_key:
        logger.error("WEATHER_API_KEY not set, cannot fetch weather for location: %s", location)
        raise WeatherApiConfigurationError("weather API key not configured")

    weather_api_endpoint = f"{config.weather_api_base_url}/v1/current.json"
    params = {"key": config.weather_api_key, "q": location, "aqi": "no"}
    logger.info("Fetching weather for location: %s", location)

    try:
        response = requests.get(weather_api_endpoint, params=params, timeout=config.weather_api_timeout)
    except requests.exceptions.RequestException as err:
        logger.error("Failed to connect to WeatherAPI for location %s: %r", location, err)
        raise WeatherApiConnectionError(err)

    if response.status_code != 200:
        details = _decode_error_details(response)
        logger.error("WeatherAPI returned status %d for location %s, details: %r",
                     response.status_code, location, details)
        raise WeatherApiStatusError(response.status_code, details)

    try:
        data = response.json()
        current_dict = data.get("current") or {}
        temp_c = current_dict["temp_c"]
        if isinstance(temp_c, bool) or not isinstance(temp_c, (int, float)):
            raise ValueError(f"current.temp_c is not a number: {temp_c!r}")
    except (ValueError, KeyError, TypeError, AttributeError) as err:
        logger.error("Failed to decode WeatherAPI response for location %s: %r", location, err)
        raise WeatherApiParseError(err)

    location_dict = data.get("location")
    if not isinstance(location_dict, dict):
        location_dict = {}
    weather_api_response = WeatherApiResponse(location_dict.get("name"), location_dict.get("region"),
                                              location_dict.get("country"), current_dict.get("last_updated_epoch"),
                                              float(temp_c))

    logger.info("Fetched temperature for %s: %.1f°C", location, weather_api_response.temp_c)
    return weather_api_response
