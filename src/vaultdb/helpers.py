"""
Vault Helper Functions

Process-wide client for applications that configure Vault through the
environment.
"""
import logging
from typing import Optional

from vaultdb.client import VaultClient
from vaultdb.config import VaultConfig

logger = logging.getLogger(__name__)

# Global Vault client instance (lazy initialization)
_vault_client: Optional[VaultClient] = None


def get_vault_client() -> Optional[VaultClient]:
    """
    Get or create the shared Vault client.
    
    The client connects on first use. Its HTTP session belongs to the event
    loop that opened it; when called from a new loop (for example a second
    asyncio.run) the session is reopened on that loop.
    
    Returns:
        VaultClient instance or None if Vault is not configured
    """
    global _vault_client
    
    if _vault_client is not None:
        return _vault_client
    
    config = VaultConfig.from_env()
    if config.address and config.has_credentials:
        _vault_client = VaultClient(config)
        logger.info("Vault client initialized")
        return _vault_client
    
    logger.debug("Vault not configured (missing address or credentials)")
    return None


async def close_vault_client() -> None:
    """Close and forget the shared client."""
    global _vault_client
    
    if _vault_client is not None:
        await _vault_client.close()
        _vault_client = None
