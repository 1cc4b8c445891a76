"""
Endpoint Dispatch

Request descriptors and the three ways of executing them against a client:
discarding the result, ignoring the body entirely, or decoding a typed record.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from vaultdb.errors import ClientError, DecodeError, status_error

if TYPE_CHECKING:
    from vaultdb.client import Client

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Envelope members that describe a lease rather than the secret itself
LEASE_FIELDS = ("lease_id", "lease_duration", "renewable")


@dataclass(frozen=True)
class Endpoint:
    """A finalized request, ready to be sent."""
    
    method: str
    path: str
    body: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class Response:
    """Raw HTTP response as returned by a transport client."""
    
    status_code: int
    content: bytes = b""
    url: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def instrument(func: Callable) -> Callable:
    """
    Log failures of an async operation before re-raising them.
    
    Arguments are not logged since options may carry passwords.
    """
    name = func.__qualname__
    
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ClientError as e:
            logger.error(f"{name} failed: {e}")
            raise
    return wrapper


def _error_messages(response: Response) -> List[str]:
    """Extract the service-provided error messages from a failed response."""
    try:
        payload = json.loads(response.content)
    except ValueError:
        text = response.content.decode("utf-8", errors="replace").strip()
        return [text] if text else []
    
    if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
        return [str(e) for e in payload["errors"]]
    return []


async def _send(client: "Client", endpoint: Endpoint) -> Response:
    logger.debug(f"{endpoint.method} {endpoint.path}")
    response = await client.send(endpoint)
    if not response.ok:
        raise status_error(response.status_code, _error_messages(response), response.url)
    return response


def _decode_envelope(response: Response) -> Dict[str, Any]:
    try:
        envelope = json.loads(response.content)
    except ValueError as e:
        raise DecodeError(f"Response from {response.url} is not valid JSON: {e}") from e
    
    if not isinstance(envelope, dict):
        raise DecodeError(f"Response from {response.url} is not a JSON object")
    
    for warning in envelope.get("warnings") or []:
        logger.warning(f"Vault warning for {response.url}: {warning}")
    return envelope


async def exec_with_empty_result(client: "Client", endpoint: Endpoint) -> None:
    """
    Execute an endpoint whose response carries nothing of interest.
    
    A body, when present, must still be a valid Vault envelope; its
    warnings are logged and the rest is discarded.
    
    Raises:
        StatusError: Vault returned a non-2xx status
        DecodeError: A non-empty body was not a JSON object
    """
    response = await _send(client, endpoint)
    if response.content.strip():
        _decode_envelope(response)


async def exec_with_empty(client: "Client", endpoint: Endpoint) -> None:
    """
    Execute an endpoint that is expected to reply with no body.
    
    Only the status code is inspected.
    
    Raises:
        StatusError: Vault returned a non-2xx status
    """
    await _send(client, endpoint)


async def exec_with_result(client: "Client", endpoint: Endpoint, model: Type[T]) -> T:
    """
    Execute an endpoint and decode the ``data`` member of its response.
    
    Lease metadata from the envelope is merged into the record so models
    describing leased credentials can expose it.
    
    Args:
        client: Transport client
        endpoint: Request to execute
        model: Response record type
        
    Returns:
        The decoded record
        
    Raises:
        StatusError: Vault returned a non-2xx status
        DecodeError: The body was missing, malformed or did not match ``model``
    """
    response = await _send(client, endpoint)
    envelope = _decode_envelope(response)
    
    data = envelope.get("data")
    if not isinstance(data, dict):
        raise DecodeError(f"Response from {response.url} has no data object")
    
    lease = {k: envelope[k] for k in LEASE_FIELDS if k in envelope and k not in data}
    try:
        return model.model_validate({**data, **lease})
    except ValidationError as e:
        raise DecodeError(f"Unexpected response shape for {model.__name__}: {e}") from e
