"""ViaCEP Service Provider Module.

This module implements the integration with the ViaCEP address-lookup
service. It resolves an 8-digit CEP to the city and state it belongs to,
and classifies every failure as either "not found" or an upstream error.

ViaCEP reports an unknown CEP with an 'erro' field whose type is not
stable (sometimes a boolean, sometimes a string), so the field is treated
as a presence check, together with an empty-city fallback, rather than
decoded strictly.

The module follows a clean separation of concerns:
    1. Exception handling for not-found and request errors.
    2. Data modeling via the Location class.
    3. API interaction through the fetch_location_via_cep function.
"""

import logging

import requests

from config import Config
from service_errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class ViaCepCepNotFoundError(NotFoundError):
    """Raised when ViaCEP has no address for the requested CEP.

        A non-success status from ViaCEP is reported this way too, so a
        degraded upstream is indistinguishable from a genuinely absent CEP.
    """
    def __init__(self, cep: str):
        super().__init__(cep)
        self.cep = cep

    def __repr__(self):
        """Returns a string representation of the ViaCepCepNotFoundError instance."""
        return f"{self.__class__.__name__}(cep={self.cep!r})"


class ViaCepRequestError(UpstreamError):
    """Raised when ViaCEP cannot be reached or its response cannot be decoded.

        Attributes:
            error: The underlying exception that triggered this error.
    """
    def __init__(self, error: Exception):
        """Initializes the error with the original exception.

                Args:
                    error: The source RequestException or decoding error.
        """
        super().__init__(error)
        self.error = error

    def __repr__(self):
        """Returns a string representation of the ViaCepRequestError instance, including the wrapped error."""
        return f"{self.__class__.__name__}({repr(self.error)})"


class Location:
    """A city and state resolved from a CEP.

        Attributes:
            city: Name of the city (e.g., 'São Paulo').
            state: Two-letter state code (e.g., 'SP').
    """
    def __init__(self, city: str, state: str):
        self.city = city
        self.state = state

    def __str__(self) -> str:
        """Returns the location as a 'City,ST' weather query."""
        return f"{self.city},{self.state}"

    def __repr__(self) -> str:
        """Returns a string representation of the Location instance."""
        return f"{self.__class__.__name__}(city={self.city!r}, state={self.state!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Location) and (self.city, self.state) == (other.city, other.state)


def fetch_location_via_cep(cep: str, config: Config) -> Location:
    """Resolves a CEP to its city and state through ViaCEP.

        A single request is made; nothing is retried.

        Args:
            cep: A normalized, 8-digit CEP.
            config: The service configuration (base URL and timeout).

        Returns:
            The Location the CEP belongs to.

        Raises:
            ViaCepCepNotFoundError: If ViaCEP answers with a non-success status,
                flags the CEP with 'erro', or returns no city.
            ViaCepRequestError: If ViaCEP is unreachable or the body is not a JSON object.
    """
    via_cep_endpoint = f"{config.viacep_base_url}/ws/{cep}/json/"
    try:
        response = requests.get(via_cep_endpoint, timeout=config.viacep_timeout)
    except requests.exceptions.RequestException as err:
        logger.error("Could not reach ViaCEP for CEP %s: %r", cep, err)
        raise ViaCepRequestError(err)

    if response.status_code != 200:
        logger.info("ViaCEP returned status %d for CEP %s", response.status_code, cep)
        raise ViaCepCepNotFoundError(cep)

    try:
        data = response.json()
    except ValueError as err:
        logger.error("Could not decode ViaCEP response for CEP %s: %r", cep, err)
        raise ViaCepRequestError(err)

    if not isinstance(data, dict):
        logger.error("Unexpected ViaCEP response for CEP %s: %r", cep, data)
        raise ViaCepRequestError(ValueError(f"expected a JSON object, got {type(data).__name__}"))

    city = data.get("localidade")
    if data.get("erro") is not None or not city:
        logger.info("ViaCEP has no address for CEP %s (erro=%r, localidade=%r)", cep, data.get("erro"), city)
        raise ViaCepCepNotFoundError(cep)

    return Location(city, data.get("uf") or "")
