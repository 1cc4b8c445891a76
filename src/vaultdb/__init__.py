"""
vaultdb - Vault Database Secrets Engine Client

Typed async client for the HashiCorp Vault database secrets engine.

Modules:
- config: Vault address, credentials and mount configuration
- client: Transport clients (httpx, hvac)
- api: Request descriptors and dispatch
- database: Connections, roles and static roles
"""

__version__ = "0.1.0"

from vaultdb.config import VaultConfig
from vaultdb.errors import (
    ClientError,
    BuildError,
    MissingFieldError,
    InvalidFieldError,
    TransportError,
    StatusError,
    NotFoundError,
    DecodeError,
)
from vaultdb.api import Endpoint, Response
from vaultdb.client import Client, VaultClient, HvacClient
from vaultdb.helpers import get_vault_client, close_vault_client
from vaultdb.database import connection, role, static_role

__all__ = [
    # Version
    "__version__",
    # Configuration
    "VaultConfig",
    # Errors
    "ClientError",
    "BuildError",
    "MissingFieldError",
    "InvalidFieldError",
    "TransportError",
    "StatusError",
    "NotFoundError",
    "DecodeError",
    # Transport
    "Endpoint",
    "Response",
    "Client",
    "VaultClient",
    "HvacClient",
    "get_vault_client",
    "close_vault_client",
    # Database engine
    "connection",
    "role",
    "static_role",
]
