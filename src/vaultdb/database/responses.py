"""
Database Secrets Engine Responses

Typed records for the ``data`` member of the engine's responses.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConnectionDetails(BaseModel):
    """Plugin-specific connection parameters (passwords are never returned)."""
    
    model_config = ConfigDict(extra="allow")
    
    connection_url: Optional[str] = None
    username: Optional[str] = None
    max_open_connections: Optional[int] = None
    max_idle_connections: Optional[int] = None
    max_connection_lifetime: Optional[str] = None
    username_template: Optional[str] = None
    disable_escaping: Optional[bool] = None


class ReadConnectionResponse(BaseModel):
    plugin_name: str
    plugin_version: Optional[str] = None
    allowed_roles: List[str] = Field(default_factory=list)
    connection_details: ConnectionDetails = Field(default_factory=ConnectionDetails)
    password_policy: Optional[str] = None
    root_credentials_rotate_statements: List[str] = Field(default_factory=list)
    verify_connection: Optional[bool] = None


class ReadRoleResponse(BaseModel):
    db_name: str
    default_ttl: int = 0
    max_ttl: int = 0
    creation_statements: List[str] = Field(default_factory=list)
    revocation_statements: List[str] = Field(default_factory=list)
    rollback_statements: List[str] = Field(default_factory=list)
    renew_statements: List[str] = Field(default_factory=list)


class ReadStaticRoleResponse(BaseModel):
    db_name: str
    username: str
    rotation_period: int = 0
    rotation_statements: List[str] = Field(default_factory=list)
    last_vault_rotation: Optional[datetime] = None


class GenerateCredentialsResponse(BaseModel):
    """Freshly generated dynamic credentials and their lease."""
    
    username: str
    password: str = Field(repr=False)
    lease_id: Optional[str] = None
    lease_duration: Optional[int] = None
    renewable: Optional[bool] = None


class GetStaticCredentialsResponse(BaseModel):
    """Credentials currently stored for a static role."""
    
    username: str
    password: str = Field(repr=False)
    last_vault_rotation: Optional[datetime] = None
    rotation_period: int = 0
    ttl: int = 0


class ListResponse(BaseModel):
    keys: List[str] = Field(default_factory=list)
