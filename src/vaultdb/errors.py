"""
Client Errors

Every operation either returns its result or raises one of these.
"""
from typing import List, Optional


class ClientError(Exception):
    """Base class for all errors raised by the client."""


class BuildError(ClientError):
    """A request could not be built; nothing was sent."""


class MissingFieldError(BuildError):
    """A required request field is absent or empty."""
    
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class InvalidFieldError(BuildError):
    """A request field has a value that cannot be used in a request path."""
    
    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"Invalid {field}: {reason}")


class TransportError(ClientError):
    """Connectivity, timeout or TLS failure talking to Vault."""


class StatusError(ClientError):
    """Vault answered with a non-success HTTP status."""
    
    def __init__(
        self,
        status_code: int,
        errors: Optional[List[str]] = None,
        url: Optional[str] = None
    ):
        self.status_code = status_code
        self.errors = errors or []
        self.url = url
        message = f"Vault returned HTTP {status_code}"
        if url:
            message += f" for {url}"
        if self.errors:
            message += f": {'; '.join(self.errors)}"
        super().__init__(message)


class NotFoundError(StatusError):
    """The requested resource does not exist (HTTP 404)."""


class DecodeError(ClientError):
    """The response body did not match the expected shape."""


def status_error(
    status_code: int,
    errors: Optional[List[str]] = None,
    url: Optional[str] = None
) -> StatusError:
    """Build the StatusError subclass matching an HTTP status code."""
    if status_code == 404:
        return NotFoundError(status_code, errors, url)
    return StatusError(status_code, errors, url)
