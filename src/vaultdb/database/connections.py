"""
Connections

A connection tells Vault how to reach and authenticate to a database.
"""
from vaultdb.api import instrument
from vaultdb.client import Client
from vaultdb.database.requests import Overrides, PostgreSQLConnectionRequest, ResourceKind
from vaultdb.database.resources import ResourceOperations
from vaultdb.database.responses import ReadConnectionResponse

CONNECTION = ResourceKind(
    name="connection",
    segment="config",
    options=PostgreSQLConnectionRequest,
    read_model=ReadConnectionResponse,
    set_returns_body=True,
)


class ConnectionOperations(ResourceOperations):
    """Operations on ``<mount>/config/<name>``."""
    
    def __init__(self):
        super().__init__(CONNECTION)
    
    async def postgres(
        self,
        client: Client,
        mount: str,
        name: str,
        opts: Overrides = None
    ) -> None:
        """
        Create or update a PostgreSQL connection.
        
        Args:
            client: Transport client
            mount: Secrets engine mount point
            name: Connection name
            opts: PostgreSQLConnectionRequest or mapping of its fields
        """
        await self.set(client, mount, name, opts)
    
    async def read(self, client: Client, mount: str, name: str) -> ReadConnectionResponse:
        return await super().read(client, mount, name)
    
    @instrument
    async def reset(self, client: Client, mount: str, name: str) -> None:
        """Close the connection's pooled sessions and reload its configuration."""
        await self._action(client, "reset", mount, name)
    
    @instrument
    async def rotate(self, client: Client, mount: str, name: str) -> None:
        """Rotate the root credentials configured in a connection."""
        await self._action(client, "rotate-root", mount, name)
