"""
Generic Resource Operations

Connections, roles and static roles share the same write/read/list/delete
shape; ResourceOperations implements it once for any ResourceKind.
"""
import logging
from typing import List, Type, TypeVar

from pydantic import BaseModel

from vaultdb.api import exec_with_empty, exec_with_empty_result, exec_with_result, instrument
from vaultdb.client import Client
from vaultdb.database.requests import (
    Overrides,
    ResourceKind,
    build_endpoint,
    build_list_endpoint,
    build_set_endpoint,
)
from vaultdb.database.responses import ListResponse
from vaultdb.errors import NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ResourceOperations:
    """Remote operations common to every database engine resource."""
    
    kind: ResourceKind
    
    def __init__(self, kind: ResourceKind):
        self.kind = kind
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name!r})"
    
    @instrument
    async def set(self, client: Client, mount: str, name: str, opts: Overrides = None) -> None:
        """
        Create or update a resource.
        
        Args:
            client: Transport client
            mount: Secrets engine mount point
            name: Resource name
            opts: Options record or mapping; unset fields keep their defaults
        """
        endpoint = build_set_endpoint(self.kind, mount, name, opts)
        if self.kind.set_returns_body:
            await exec_with_empty_result(client, endpoint)
        else:
            await exec_with_empty(client, endpoint)
        logger.debug(f"Wrote {self.kind.name} {endpoint.path}")
    
    @instrument
    async def delete(self, client: Client, mount: str, name: str) -> None:
        """Delete a resource. Deleting an absent resource is left to Vault."""
        endpoint = build_endpoint("DELETE", mount, self.kind.segment, name)
        await exec_with_empty(client, endpoint)
        logger.debug(f"Deleted {self.kind.name} {endpoint.path}")
    
    @instrument
    async def list(self, client: Client, mount: str) -> List[str]:
        """
        List resource names under a mount.
        
        Returns:
            Names in the order Vault returns them; empty if there are none
        """
        endpoint = build_list_endpoint(mount, self.kind.segment)
        try:
            response = await exec_with_result(client, endpoint, ListResponse)
        except NotFoundError as e:
            # Vault answers LIST with a bare 404 when there are no keys;
            # an unknown mount carries an error message
            if e.errors:
                raise
            logger.debug(f"No {self.kind.name}s under {endpoint.path}")
            return []
        return response.keys
    
    @instrument
    async def read(self, client: Client, mount: str, name: str):
        """
        Read a resource.
        
        Raises:
            NotFoundError: The resource does not exist
        """
        endpoint = build_endpoint("GET", mount, self.kind.segment, name)
        return await exec_with_result(client, endpoint, self.kind.read_model)
    
    async def _action(self, client: Client, segment: str, mount: str, name: str) -> None:
        endpoint = build_endpoint("POST", mount, segment, name)
        await exec_with_empty(client, endpoint)
        logger.info(f"Vault {segment} completed for {self.kind.name} {name}")
    
    async def _fetch(self, client: Client, segment: str, mount: str, name: str, model: Type[T]) -> T:
        endpoint = build_endpoint("GET", mount, segment, name)
        return await exec_with_result(client, endpoint, model)
