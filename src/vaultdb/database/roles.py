"""
Roles

A role describes how Vault generates short-lived credentials against a
connection. Every call to ``creds`` creates a new database user.
"""
from vaultdb.api import instrument
from vaultdb.client import Client
from vaultdb.database.requests import ResourceKind, SetRoleRequest
from vaultdb.database.resources import ResourceOperations
from vaultdb.database.responses import GenerateCredentialsResponse, ReadRoleResponse

ROLE = ResourceKind(
    name="role",
    segment="roles",
    options=SetRoleRequest,
    read_model=ReadRoleResponse,
    required_fields=("db_name",),
)


class RoleOperations(ResourceOperations):
    """Operations on ``<mount>/roles/<name>``."""
    
    def __init__(self):
        super().__init__(ROLE)
    
    async def read(self, client: Client, mount: str, name: str) -> ReadRoleResponse:
        return await super().read(client, mount, name)
    
    @instrument
    async def creds(self, client: Client, mount: str, name: str) -> GenerateCredentialsResponse:
        """Generate a new set of credentials from a role."""
        return await self._fetch(client, "creds", mount, name, GenerateCredentialsResponse)
