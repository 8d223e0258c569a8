"""Local HTTP listener for running the service outside AWS Lambda.

Binds the configured PORT and forwards every request, whatever its method, to the Lambda
handler as an API Gateway HTTP API (v2) event, so the same routing and
response building serve both deployments. Each request is handled on its
own thread.
"""
import logging
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

import lambda_function
from config import Config

logger = logging.getLogger(__name__)


class LocalContext:
    """Stand-in for the Lambda context object, carrying a fresh request id."""
    def __init__(self):
        self.aws_request_id = str(uuid.uuid4())


def build_lambda_event(raw_path: str, method: str = "GET", source_ip: str = "") -> dict:
    """Builds a minimal API Gateway HTTP API (v2) event for a local request.

        Args:
            raw_path: The request target as received (query strings are dropped).
            method: The HTTP method.
            source_ip: The client address.

        Returns:
            The event dictionary expected by lambda_function.handle_request.
    """
    split_path = urlsplit(raw_path)
    return {
        'rawPath': split_path.path or "/",
        'rawQueryString': split_path.query,
        'requestContext': {
            'http': {
                'method': method,
                'path': split_path.path or "/",
                'sourceIp': source_ip,
            }
        },
    }


class Handler(BaseHTTPRequestHandler):
    server_version = "cep-weather/0.1"

    def _forward(self, method: str) -> None:
        # request bodies are not used by any route
        content_length = int(self.headers.get("Content-Length") or 0)
        if content_length:
            self.rfile.read(content_length)

        event = build_lambda_event(self.path, method, self.client_address[0])
        response = lambda_function.handle_request(event, LocalContext(), self.server.config)

        body = response['body'].encode("utf-8")
        self.send_response(response['statusCode'])
        for name, value in response['headers'].items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if method != "HEAD":
            self.wfile.write(body)

    def do_GET(self) -> None:  # noqa: N802
        self._forward("GET")

    def do_HEAD(self) -> None:  # noqa: N802
        self._forward("HEAD")

    def do_POST(self) -> None:  # noqa: N802
        self._forward("POST")

    def do_PUT(self) -> None:  # noqa: N802
        self._forward("PUT")

    def do_DELETE(self) -> None:  # noqa: N802
        self._forward("DELETE")

    def log_message(self, format, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def main() -> None:
    config = Config.from_env()
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    httpd = ThreadingHTTPServer(("0.0.0.0", config.port), Handler)
    httpd.config = config

    logger.info("Server starting on port %d", config.port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server shutting down")
    finally:
        httpd.server_close()


if __name__ == "__main__":
    main()
