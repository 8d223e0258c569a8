import types

import pytest

from config import Config

VIACEP_BASE_URL = "https://viacep.test"
WEATHER_API_BASE_URL = "https://weatherapi.test"


@pytest.fixture
def config() -> Config:
    """A Config pointing at fake upstream hosts, with an access key set."""
    return Config(weather_api_key="test-key", viacep_base_url=VIACEP_BASE_URL,
                  weather_api_base_url=WEATHER_API_BASE_URL, viacep_timeout=3.0, weather_api_timeout=4.0)


@pytest.fixture
def lambda_context():
    """A stand-in for the AWS Lambda context object."""
    return types.SimpleNamespace(aws_request_id="test-request-id")


@pytest.fixture
def via_cep_payload() -> dict:
    return {
        "cep": "01310-100",
        "logradouro": "Avenida Paulista",
        "complemento": "de 612 a 1510 - lado par",
        "bairro": "Bela Vista",
        "localidade": "São Paulo",
        "uf": "SP",
    }


@pytest.fixture
def weather_api_payload() -> dict:
    return {
        "location": {"name": "Sao Paulo", "region": "Sao Paulo", "country": "Brazil"},
        "current": {"last_updated_epoch": 1760000000, "temp_c": 25.0},
    }
