"""
Vault Transport Clients

The operations in ``vaultdb.database`` only need something that can send an
Endpoint and hand back the raw Response. Two implementations are provided:
an async httpx client that talks to Vault directly, and a bridge that reuses
an existing hvac adapter.
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx
import hvac
from hvac.adapters import Adapter, RawAdapter
import requests

from vaultdb.api import Endpoint, Response
from vaultdb.config import VaultConfig
from vaultdb.errors import ClientError, DecodeError, TransportError, status_error

logger = logging.getLogger(__name__)


@runtime_checkable
class Client(Protocol):
    """Anything able to execute a described HTTP request against Vault."""
    
    async def send(self, endpoint: Endpoint) -> Response:
        ...


class VaultClient:
    """
    Async HashiCorp Vault client built on httpx.
    
    Supports both token and AppRole authentication. Safe to share between
    concurrent tasks; the underlying connection pool belongs to httpx.
    """
    
    def __init__(
        self,
        config: Optional[VaultConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Vault client.
        
        Args:
            config: Vault configuration. If None, loads from environment.
            transport: Custom httpx transport (mainly for tests)
        """
        self.config = config or VaultConfig.from_env()
        self._transport = transport
        self._token = self.config.token
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
    
    async def __aenter__(self) -> "VaultClient":
        await self.connect()
        return self
    
    async def __aexit__(self, *args: Any) -> None:
        await self.close()
    
    @property
    def connected(self) -> bool:
        return self._client is not None
    
    def _bind_loop(self) -> None:
        """
        Forget a session opened on another event loop.
        
        httpx connections and the asyncio lock belong to the loop that created
        them; a client reused across asyncio.run calls reopens its session.
        """
        loop = asyncio.get_running_loop()
        if self._loop is loop:
            return
        if self._client is not None:
            logger.debug("Event loop changed, reopening Vault HTTP session")
        self._client = None
        self._lock = asyncio.Lock()
        self._loop = loop
    
    async def connect(self) -> None:
        """Open the HTTP session and authenticate if no token is configured."""
        self._bind_loop()
        async with self._lock:
            if self._client is not None:
                return
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url,
                timeout=httpx.Timeout(self.config.timeout),
                verify=self.config.verify,
                transport=self._transport,
            )
            if not self._token:
                try:
                    await self._authenticate()
                except BaseException:
                    await self.close()
                    raise
            logger.info(f"Vault client connected: {self.config.address}")
    
    async def close(self) -> None:
        """Close the HTTP session."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
    
    def _headers(self) -> Dict[str, str]:
        headers = {"X-Vault-Request": "true"}
        if self._token:
            headers["X-Vault-Token"] = self._token
        if self.config.namespace:
            headers["X-Vault-Namespace"] = self.config.namespace
        return headers
    
    async def _authenticate(self) -> None:
        """Log in with AppRole and keep the issued client token."""
        if not (self.config.role_id and self.config.secret_id):
            raise ValueError(
                "Either VAULT_TOKEN or VAULT_ROLE_ID/VAULT_SECRET_ID must be provided"
            )
        
        path = f"auth/{self.config.approle_mount}/login"
        response = await self._request(
            "POST",
            path,
            {"role_id": self.config.role_id, "secret_id": self.config.secret_id},
        )
        if not response.is_success:
            raise status_error(response.status_code, url=str(response.url))
        
        try:
            auth = response.json()["auth"]
            self._token = auth["client_token"]
        except (ValueError, KeyError, TypeError) as e:
            raise DecodeError(f"Unexpected AppRole login response: {e}") from e
        logger.debug(f"Authenticated with Vault using AppRole (TTL: {auth.get('lease_duration')}s)")
    
    async def _request(self, method: str, path: str, body: Optional[Dict[str, Any]]) -> httpx.Response:
        try:
            return await self._client.request(method, path, json=body, headers=self._headers())
        except httpx.TimeoutException as e:
            raise TransportError(f"Timed out talking to Vault at {self.config.address}: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to reach Vault at {self.config.address}: {e}") from e
    
    async def health_check(self) -> Dict[str, Any]:
        """
        Check Vault health.
        
        Returns:
            Health status dictionary
        """
        try:
            await self.connect()
            response = await self._request("GET", "sys/health", None)
            health = response.json()
            return {
                "healthy": not health.get("sealed", True),
                "initialized": health.get("initialized", False),
                "sealed": health.get("sealed", False),
                "standby": health.get("standby", False),
                "version": health.get("version"),
            }
        except (ClientError, ValueError) as e:
            logger.error(f"Vault health check failed: {e}")
            return {
                "healthy": False,
                "error": str(e)
            }
    
    async def send(self, endpoint: Endpoint) -> Response:
        """Send a request, connecting first if needed."""
        self._bind_loop()
        if self._client is None or not self._token:
            await self.connect()
        
        response = await self._request(endpoint.method, endpoint.path, endpoint.body)
        return Response(
            status_code=response.status_code,
            content=response.content,
            url=str(response.url),
        )


class HvacClient:
    """
    Send requests through an hvac adapter.
    
    hvac is synchronous, so each request runs in a worker thread. Useful
    when an application already holds an authenticated ``hvac.Client``.
    """
    
    def __init__(self, adapter: Optional[Adapter] = None, config: Optional[VaultConfig] = None):
        if adapter is None:
            config = config or VaultConfig.from_env()
            adapter = RawAdapter(
                base_uri=config.address,
                token=config.token,
                namespace=config.namespace,
                timeout=config.timeout,
                verify=config.verify,
            )
        self.adapter = adapter
    
    @classmethod
    def from_hvac(cls, client: hvac.Client) -> "HvacClient":
        """Share the session, credentials and TLS settings of an existing hvac client."""
        request_kwargs = client.adapter._kwargs
        adapter = RawAdapter(
            base_uri=client.adapter.base_uri,
            token=client.token,
            namespace=client.adapter.namespace,
            session=client.adapter.session,
            cert=request_kwargs.get("cert"),
            verify=request_kwargs.get("verify", True),
            timeout=request_kwargs.get("timeout", 30),
            proxies=request_kwargs.get("proxies"),
        )
        return cls(adapter)
    
    async def send(self, endpoint: Endpoint) -> Response:
        kwargs = {} if endpoint.body is None else {"json": endpoint.body}
        try:
            response = await asyncio.to_thread(
                self.adapter.request,
                endpoint.method,
                f"/v1/{endpoint.path}",
                raise_exception=False,
                **kwargs,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Failed to reach Vault: {e}") from e
        
        return Response(
            status_code=response.status_code,
            content=response.content,
            url=response.url,
        )
