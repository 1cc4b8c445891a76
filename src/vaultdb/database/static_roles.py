"""
Static Roles

A static role binds an existing database account to Vault, which rotates
its password on a schedule. ``creds`` returns the current password, it
does not create one.
"""
from vaultdb.api import instrument
from vaultdb.client import Client
from vaultdb.database.requests import ResourceKind, SetStaticRoleRequest
from vaultdb.database.resources import ResourceOperations
from vaultdb.database.responses import GetStaticCredentialsResponse, ReadStaticRoleResponse

STATIC_ROLE = ResourceKind(
    name="static role",
    segment="static-roles",
    options=SetStaticRoleRequest,
    read_model=ReadStaticRoleResponse,
    required_fields=("db_name", "username"),
)


class StaticRoleOperations(ResourceOperations):
    """Operations on ``<mount>/static-roles/<name>``."""
    
    def __init__(self):
        super().__init__(STATIC_ROLE)
    
    async def read(self, client: Client, mount: str, name: str) -> ReadStaticRoleResponse:
        return await super().read(client, mount, name)
    
    @instrument
    async def creds(self, client: Client, mount: str, name: str) -> GetStaticCredentialsResponse:
        """Get the credentials currently stored for a static role."""
        return await self._fetch(client, "static-creds", mount, name, GetStaticCredentialsResponse)
    
    @instrument
    async def rotate(self, client: Client, mount: str, name: str) -> None:
        """Rotate the password of a static role immediately."""
        await self._action(client, "rotate-role", mount, name)
