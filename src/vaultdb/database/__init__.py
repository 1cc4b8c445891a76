"""
Database Secrets Engine

Usage::

    from vaultdb.database import connection, role

    await connection.postgres(client, "database", "my-db", {"connection_url": url})
    creds = await role.creds(client, "database", "my-role")
"""
from vaultdb.database.connections import CONNECTION, ConnectionOperations
from vaultdb.database.roles import ROLE, RoleOperations
from vaultdb.database.static_roles import STATIC_ROLE, StaticRoleOperations
from vaultdb.database.requests import (
    PostgreSQLConnectionRequest,
    SetRoleRequest,
    SetStaticRoleRequest,
    ResourceKind,
    merge_options,
)
from vaultdb.database.responses import (
    ReadConnectionResponse,
    ReadRoleResponse,
    ReadStaticRoleResponse,
    GenerateCredentialsResponse,
    GetStaticCredentialsResponse,
)

connection = ConnectionOperations()
role = RoleOperations()
static_role = StaticRoleOperations()

__all__ = [
    'connection',
    'role',
    'static_role',
    'ConnectionOperations',
    'RoleOperations',
    'StaticRoleOperations',
    'CONNECTION',
    'ROLE',
    'STATIC_ROLE',
    'ResourceKind',
    'PostgreSQLConnectionRequest',
    'SetRoleRequest',
    'SetStaticRoleRequest',
    'merge_options',
    'ReadConnectionResponse',
    'ReadRoleResponse',
    'ReadStaticRoleResponse',
    'GenerateCredentialsResponse',
    'GetStaticCredentialsResponse',
]
