"""AWS Lambda Handler and Request Routing Module.

This module acts as the entry point for the CEP Weather service. It
manages the end-to-end lifecycle of an HTTP request, including:
    1. Routing the request path to the health check or the weather lookup.
    2. Extracting the CEP from the path.
    3. Coordinating with the business logic layer to fetch the temperature.
    4. Mapping internal outcomes to standard HTTP status codes and responses.

Environment Requirements:
    - WEATHER_API_KEY: WeatherAPI.com access key (see config.Config for the rest).
"""
import json
import logging
from typing import Optional, TYPE_CHECKING
from urllib.parse import unquote

# makes AWS specific type hinting available in IDE, without bundling the library when deploying to the cloud
if TYPE_CHECKING:
    from aws_lambda_typing.context import Context

import cep_weather_data
from cep_weather_data import CepWeatherDataFetchError, Outcome
from config import Config

WEATHER_PATH = "/weather"

logger = logging.getLogger(__name__)

CONFIG = Config.from_env()
logging.getLogger().setLevel(CONFIG.log_level)


def get_request_path(event: dict) -> str:
    """Extracts the percent-decoded request path from an API Gateway HTTP API (v2) or REST API (v1) event."""
    path = event.get('rawPath') or event.get('path') or "/"
    return unquote(path)


def get_request_cep(path: str) -> Optional[str]:
    """Returns the CEP segment of a '/weather/{cep}' path, '' for a bare '/weather', or None for other paths."""
    if path == WEATHER_PATH:
        return ""
    if path.startswith(WEATHER_PATH + "/"):
        return path[len(WEATHER_PATH) + 1:]
    return None


def get_response(status_code: int, context: "Context", content_type: str = "application/json", **kwargs) -> dict:
    """Constructs a standardized HTTP response for the Lambda Gateway.

        Args:
            status_code: HTTP status code to return.
            context: AWS Lambda context object (used for Request ID).
            content_type: MIME type for the response header.
            **kwargs: Arbitrary key-value pairs to include in the JSON body.

        Returns:
            A dictionary formatted as an AWS Lambda HTTP response.
    """
    headers = {'Content-Type': content_type}
    request_id = getattr(context, 'aws_request_id', None)
    if request_id:
        headers['X-Request-ID'] = request_id

    return {
        'statusCode': status_code,
        'headers': headers,
        'body': json.dumps(kwargs, ensure_ascii=False)
    }


def get_outcome_response(outcome: Outcome, context: "Context") -> dict:
    """Returns the error response ({"message": ...}) for a non-success Outcome."""
    return get_response(outcome.status_code, context, message=outcome.message)


def handle_health(context: "Context") -> dict:
    """Returns the HTTP 200 health check response, independent of any upstream state."""
    return get_response(200, context, status="ok")


def handle_weather(cep: str, context: "Context", config: Config) -> dict:
    """Runs the weather lookup for a CEP and maps its outcome to an HTTP response."""
    try:
        reading = cep_weather_data.fetch_cep_weather_data(cep, config)
    except CepWeatherDataFetchError as e:
        if e.outcome.status_code >= 500:
            logger.error("Weather request for CEP %r failed with %s: %r", cep, e.outcome.name, e)
        else:
            logger.info("Weather request for CEP %r rejected with %s", cep, e.outcome.name)
        return get_outcome_response(e.outcome, context)

    return get_response(Outcome.SUCCESS.status_code, context, **reading.to_dict())


def handle_request(event: dict, context: "Context", config: Config) -> dict:
    """Routes a request to the weather lookup or, for any other path, to the health check."""
    path = get_request_path(event)
    cep = get_request_cep(path)

    if cep is None:
        return handle_health(context)

    return handle_weather(cep, context, config)


def lambda_handler(event, context: "Context") -> dict:
    """The primary execution entry point for the AWS Lambda function.

        Execution Flow:
            1. Route the request by path.
            2. For '/weather/{cep}', validate the CEP, resolve its location and fetch the temperature.
            3. Return a JSON structured HTTP response with the temperature in Celsius,
            Fahrenheit and Kelvin, or an appropriate error status.
    """
    return handle_request(event, context, CONFIG)
