"""Tests for the Lambda handler: routing, status codes and response bodies.

Requests are fed to handle_request as API Gateway HTTP API events, with
both upstreams mocked, so the full request path runs without network access.
"""

import json

import pytest
import requests

import lambda_function
from lambda_function import handle_request, get_request_cep

VIACEP_URL = "https://viacep.test/ws/01310100/json/"
WEATHER_API_URL = "https://weatherapi.test/v1/current.json"


def make_event(path: str) -> dict:
    return {"rawPath": path, "requestContext": {"http": {"method": "GET", "sourceIp": "127.0.0.1"}}}


def call(path, context, config):
    response = handle_request(make_event(path), context, config)
    return response["statusCode"], json.loads(response["body"]), response["headers"]


@pytest.mark.parametrize("path, expected_output", [
    ("/weather/01310100", "01310100"),
    ("/weather/", ""),
    ("/weather", ""),
    ("/weather/01310/100", "01310/100"),
    ("/", None),
    ("/weatherman", None),
])
def test_get_request_cep(path, expected_output):
    assert get_request_cep(path) == expected_output


def test_health(requests_mock, lambda_context, config):
    """The health route never touches the upstreams."""
    status_code, body, headers = call("/", lambda_context, config)

    assert status_code == 200
    assert body == {"status": "ok"}
    assert headers["Content-Type"] == "application/json"
    assert headers["X-Request-ID"] == "test-request-id"
    assert not requests_mock.called


@pytest.mark.parametrize("path", ["/weather/0131010a", "/weather/0131010", "/weather/013101000", "/weather/",
                                  "/weather/01310%20100"])
def test_weather_invalid_zipcode(requests_mock, lambda_context, config, path):
    status_code, body, headers = call(path, lambda_context, config)

    assert status_code == 422
    assert body == {"message": "invalid zipcode"}
    assert headers["Content-Type"] == "application/json"


def test_weather_zipcode_not_found(requests_mock, lambda_context, config):
    requests_mock.get("https://viacep.test/ws/99999999/json/", json={"erro": True})

    status_code, body, _ = call("/weather/99999999", lambda_context, config)

    assert status_code == 404
    assert body == {"message": "can not find zipcode"}


def test_weather_success(requests_mock, lambda_context, config, via_cep_payload):
    requests_mock.get(VIACEP_URL, json=via_cep_payload)
    requests_mock.get(WEATHER_API_URL, json={"current": {"temp_c": 21.7}})

    status_code, body, headers = call("/weather/01310-100", lambda_context, config)

    assert status_code == 200
    assert list(body) == ["temp_C", "temp_F", "temp_K"]
    assert body["temp_C"] == 21.7
    assert body["temp_F"] == body["temp_C"] * 1.8 + 32
    assert body["temp_K"] == body["temp_C"] + 273.15
    assert headers["Content-Type"] == "application/json"


def test_weather_postal_outage(requests_mock, lambda_context, config):
    requests_mock.get(VIACEP_URL, exc=requests.exceptions.ConnectTimeout)

    status_code, body, _ = call("/weather/01310100", lambda_context, config)

    assert status_code == 500
    assert body == {"message": "internal server error"}


def test_weather_upstream_failure(requests_mock, lambda_context, config, via_cep_payload):
    requests_mock.get(VIACEP_URL, json=via_cep_payload)
    requests_mock.get(WEATHER_API_URL, status_code=403, json={"error": {"code": 2008, "message": "Disabled"}})

    status_code, body, _ = call("/weather/01310100", lambda_context, config)

    assert status_code == 500
    assert body == {"message": "error fetching weather data"}


def test_repeated_requests_yield_same_status(requests_mock, lambda_context, config, via_cep_payload):
    """No caching: each request calls both upstreams, and the status stays the same while temperatures vary."""
    requests_mock.get(VIACEP_URL, json=via_cep_payload)
    weather = requests_mock.get(WEATHER_API_URL, [{"json": {"current": {"temp_c": 20.0}}},
                                                  {"json": {"current": {"temp_c": 21.5}}}])

    first_status, first_body, _ = call("/weather/01310100", lambda_context, config)
    second_status, second_body, _ = call("/weather/01310100", lambda_context, config)

    assert first_status == second_status == 200
    assert (first_body["temp_C"], second_body["temp_C"]) == (20.0, 21.5)
    assert weather.call_count == 2


def test_lambda_handler_uses_module_config(monkeypatch, lambda_context, config):
    monkeypatch.setattr(lambda_function, "CONFIG", config)

    response = lambda_function.lambda_handler(make_event("/weather/abc"), lambda_context)

    assert response["statusCode"] == 422


def test_response_without_request_id(config):
    response = handle_request(make_event("/"), object(), config)

    assert "X-Request-ID" not in response["headers"]
