"""CEP Weather Data Orchestration Module.

This module provides the core business logic of the service. It takes a raw
CEP from the request path through validation, postal resolution and weather
resolution, and converts the resulting Celsius reading into the three
temperature scales reported to the client.

Main components:
    - Outcome: Enum of every terminal result of a request, with its HTTP status and message.
    - TemperatureReading: The Celsius reading plus its derived Fahrenheit and Kelvin values.
    - fetch_cep_weather_data: The strictly sequential pipeline, terminal at the first failure.
"""

import logging
from enum import Enum
from typing import Optional

import utils
import via_cep
import weather_api
from config import Config
from service_errors import ServiceError
from via_cep import ViaCepCepNotFoundError, ViaCepRequestError

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Enumeration of the terminal results of a weather request.

        Each member contains a tuple of (status_code, message) so the HTTP
        layer can build the response without further branching.
    """
    SUCCESS = (200, None)
    INVALID_FORMAT = (422, "invalid zipcode")
    LOCATION_NOT_FOUND = (404, "can not find zipcode")
    LOCATION_RESOLUTION_FAILURE = (500, "internal server error")
    WEATHER_FAILURE = (500, "error fetching weather data")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class TemperatureReading:
    """A current temperature for a location, in Celsius, Fahrenheit and Kelvin.

        Only the Celsius value is stored; the other two scales are recomputed
        from it on every access, so the three values always agree.

        Attributes:
            temp_c: The temperature in Celsius.
    """
    def __init__(self, temp_c: float):
        self.temp_c = temp_c

    @property
    def temp_f(self) -> float:
        return utils.celsius_to_fahrenheit(self.temp_c)

    @property
    def temp_k(self) -> float:
        return utils.celsius_to_kelvin(self.temp_c)

    def __repr__(self):
        """Returns a string representation of the TemperatureReading instance."""
        return f"{self.__class__.__name__}(temp_c={self.temp_c!r})"

    def to_dict(self) -> dict:
        """Serializes the reading into the response body shape, without rounding."""
        return {
            "temp_C": self.temp_c,
            "temp_F": self.temp_f,
            "temp_K": self.temp_k,
        }


class CepWeatherDataFetchError(Exception):
    """Base exception for errors occurring during the CEP weather fetch process.

        Attributes:
            outcome: The Outcome this error terminates the request with.
    """
    outcome = Outcome.LOCATION_RESOLUTION_FAILURE

    def __init__(self, cep: str, cause: Optional[ServiceError] = None):
        super().__init__(cep, cause)
        self.cep = cep
        self.cause = cause

    def __repr__(self):
        """Returns a string representation of the error, including the wrapped cause."""
        return f"{self.__class__.__name__}(cep={self.cep!r}, cause={self.cause!r})"


class CepWeatherDataInvalidCepError(CepWeatherDataFetchError):
    """Raised when the CEP is not 8 digits once normalized."""
    outcome = Outcome.INVALID_FORMAT


class CepWeatherDataCepNotFoundError(CepWeatherDataFetchError):
    """Raised when the CEP is well-formed but the postal service has no address for it."""
    outcome = Outcome.LOCATION_NOT_FOUND


class CepWeatherDataLocationError(CepWeatherDataFetchError):
    """Raised when the postal service could not be reached or its response could not be decoded."""
    outcome = Outcome.LOCATION_RESOLUTION_FAILURE


class CepWeatherDataWeatherError(CepWeatherDataFetchError):
    """Raised when the temperature for the resolved location is unavailable, whatever the reason.

        Attributes:
            location: The 'City,ST' query the weather lookup was made for.
    """
    outcome = Outcome.WEATHER_FAILURE

    def __init__(self, cep: str, location: str, cause: ServiceError):
        super().__init__(cep, cause)
        self.location = location

    def __repr__(self):
        """Returns a string representation of the error, including the location and the wrapped cause."""
        return f"{self.__class__.__name__}(cep={self.cep!r}, location={self.location!r}, cause={self.cause!r})"


def fetch_cep_weather_data(raw_cep: str, config: Config) -> TemperatureReading:
    """Orchestrates CEP validation, location lookup and weather lookup for one request.

        Flow:
            1. Strip surrounding whitespace and validate the CEP format.
            2. Resolve the CEP to a 'City,ST' location through ViaCEP.
            3. Resolve the current Celsius temperature through WeatherAPI.
            4. Wrap the reading so Fahrenheit and Kelvin are derived from it.

        Args:
            raw_cep: The CEP as extracted from the request path.
            config: The service configuration.

        Returns:
            The TemperatureReading for the CEP's location.

        Raises:
            CepWeatherDataInvalidCepError: If the CEP format is invalid.
            CepWeatherDataCepNotFoundError: If the CEP cannot be resolved to a location.
            CepWeatherDataLocationError: If the postal service request fails.
            CepWeatherDataWeatherError: If the weather lookup fails for any reason.
    """
    cep = raw_cep.strip()
    logger.info("Received request for CEP: %s", cep)

    if not utils.is_valid_cep(cep):
        logger.info("Invalid CEP format: %r", cep)
        raise CepWeatherDataInvalidCepError(cep)

    cep = utils.normalize_cep(cep)

    try:
        location = str(via_cep.fetch_location_via_cep(cep, config))
    except ViaCepCepNotFoundError as e:
        logger.info("CEP not found: %s", cep)
        raise CepWeatherDataCepNotFoundError(cep, e)
    except ViaCepRequestError as e:
        logger.error("Failed to get location for CEP %s: %r", cep, e)
        raise CepWeatherDataLocationError(cep, e)

    logger.info("Found location for CEP %s: %s", cep, location)

    try:
        weather_api_response = weather_api.fetch_data_weather_api(location, config)
    except ServiceError as e:
        logger.error("Failed to get temperature for CEP %s at location '%s': %r", cep, location, e)
        raise CepWeatherDataWeatherError(cep, location, e)

    reading = TemperatureReading(weather_api_response.temp_c)
    logger.info("Processed CEP %s: %.1f°C, %.1f°F, %.1fK", cep, reading.temp_c, reading.temp_f, reading.temp_k)

    return reading
