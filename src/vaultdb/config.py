"""
Vault Configuration

Configuration management for the Vault database secrets engine client.
"""
import os
from typing import Optional
from dataclasses import dataclass


@dataclass
class VaultConfig:
    """Vault connection configuration."""
    
    address: str = "http://localhost:8200"
    token: Optional[str] = None
    role_id: Optional[str] = None  # For AppRole authentication
    secret_id: Optional[str] = None  # For AppRole authentication
    mount_point: str = "database"  # Database secrets engine mount point
    namespace: Optional[str] = None  # Vault namespace (for Vault Enterprise)
    approle_mount: str = "approle"
    
    # Connection settings
    timeout: float = 30
    verify: bool = True  # Verify SSL certificates
    
    @classmethod
    def from_env(cls) -> "VaultConfig":
        """Create VaultConfig from environment variables."""
        return cls(
            address=os.getenv("VAULT_ADDR", "http://localhost:8200"),
            token=os.getenv("VAULT_TOKEN"),
            role_id=os.getenv("VAULT_ROLE_ID"),
            secret_id=os.getenv("VAULT_SECRET_ID"),
            mount_point=os.getenv("VAULT_DATABASE_MOUNT", "database"),
            namespace=os.getenv("VAULT_NAMESPACE"),
            approle_mount=os.getenv("VAULT_APPROLE_MOUNT", "approle"),
            timeout=float(os.getenv("VAULT_TIMEOUT", "30")),
            verify=os.getenv("VAULT_VERIFY", "true").lower() == "true",
        )
    
    @property
    def has_credentials(self) -> bool:
        """Whether a token or a complete AppRole pair is configured."""
        return bool(self.token or (self.role_id and self.secret_id))
    
    @property
    def api_url(self) -> str:
        """Base URL of the versioned HTTP API."""
        return f"{self.address.rstrip('/')}/v1/"
