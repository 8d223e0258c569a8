"""Custom exception hierarchy for the CEP Weather service.

This module defines the error taxonomy shared by the postal resolver, the
weather resolver and the request orchestrator. Provider-specific exceptions
inherit from one of the four categories below, which lets the HTTP layer
classify any failure without knowing which upstream produced it.

Example:
    try:
        location = fetch_location_via_cep(cep, config)
    except NotFoundError:
        ...
    except UpstreamError as e:
        logger.error("Postal resolution failed: %r", e)
"""


class ServiceError(Exception):
    """Base class for any exception raised by this service.

        Catching this exception will intercept any error specifically defined
        within this application, regardless of the component that raised it.
    """
    pass


class FormatError(ServiceError):
    """Raised when client input is malformed (e.g. a CEP that is not 8 digits)."""
    pass


class NotFoundError(ServiceError):
    """Raised when the input is well-formed but the resource it names does not exist."""
    pass


class ConfigurationError(ServiceError):
    """Raised when the server is misconfigured (e.g. a missing access credential)."""
    pass


class UpstreamError(ServiceError):
    """Raised on any transport, decoding or non-success failure from an external service."""
    pass
