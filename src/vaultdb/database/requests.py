"""
Database Secrets Engine Requests

Option records for the write endpoints and the builders that turn a mount,
a name and options into a validated Endpoint. Builders never touch the
network: any problem is raised as a BuildError before dispatch.
"""
from dataclasses import dataclass
from urllib.parse import quote
from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vaultdb.api import Endpoint
from vaultdb.errors import BuildError, InvalidFieldError, MissingFieldError

O = TypeVar("O", bound="RequestOptions")

# Vault accepts either seconds or a duration string such as "1h"
Duration = Union[int, str]


class RequestOptions(BaseModel):
    """Immutable set of optional request fields."""
    
    model_config = ConfigDict(frozen=True, extra="forbid")


class PostgreSQLConnectionRequest(RequestOptions):
    """Options for configuring a PostgreSQL connection."""
    
    plugin_name: str = "postgresql-database-plugin"
    verify_connection: Optional[bool] = None
    allowed_roles: Optional[List[str]] = None
    root_rotation_statements: Optional[List[str]] = None
    password_policy: Optional[str] = None
    connection_url: Optional[str] = None
    max_open_connections: Optional[int] = None
    max_idle_connections: Optional[int] = None
    max_connection_lifetime: Optional[Duration] = None
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    username_template: Optional[str] = None
    disable_escaping: Optional[bool] = None


class SetRoleRequest(RequestOptions):
    """Options for creating or updating a role."""
    
    db_name: Optional[str] = None
    default_ttl: Optional[Duration] = None
    max_ttl: Optional[Duration] = None
    creation_statements: Optional[List[str]] = None
    revocation_statements: Optional[List[str]] = None
    rollback_statements: Optional[List[str]] = None
    renew_statements: Optional[List[str]] = None


class SetStaticRoleRequest(RequestOptions):
    """Options for creating or updating a static role."""
    
    db_name: Optional[str] = None
    username: Optional[str] = None
    rotation_period: Optional[Duration] = None
    rotation_statements: Optional[List[str]] = None


Overrides = Union[RequestOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class ResourceKind:
    """
    Everything that distinguishes one database engine resource from another.
    
    Attributes:
        name: Human readable name used in messages
        segment: Path segment under the mount (``<mount>/<segment>/<name>``)
        options: Option record accepted when writing the resource
        read_model: Record returned when reading the resource
        required_fields: Option fields that must be set before writing
        set_returns_body: Whether writes may answer with a body (warnings)
    """
    
    name: str
    segment: str
    options: Type[RequestOptions]
    read_model: Type[BaseModel]
    required_fields: Tuple[str, ...] = ()
    set_returns_body: bool = False


def merge_options(defaults: O, overrides: Overrides = None) -> O:
    """
    Layer explicitly set override fields over a defaults record.
    
    Neither argument is modified.
    
    Args:
        defaults: Baseline options
        overrides: Options record or plain mapping of fields to apply on top
        
    Returns:
        A new options record of the same type as ``defaults``
        
    Raises:
        BuildError: An override is unknown or has the wrong type
    """
    if overrides is None:
        return defaults
    
    if isinstance(overrides, RequestOptions):
        updates = overrides.model_dump(exclude_unset=True)
    else:
        updates = dict(overrides)
    
    options_type = type(defaults)
    try:
        return options_type.model_validate({**defaults.model_dump(exclude_unset=True), **updates})
    except ValidationError as e:
        raise BuildError(f"Invalid {options_type.__name__} options: {e}") from e


def _require(field: str, value: Optional[str]) -> str:
    if not isinstance(value, str) or not value.strip("/ "):
        raise MissingFieldError(field)
    return value.strip("/ ")


def _escape(field: str, value: str, nested: bool = False) -> str:
    """
    Percent-encode a path component.
    
    Only a mount may span several segments. Query, fragment and dot
    segments are rejected so a value can never address another resource.
    """
    if not nested and "/" in value:
        raise InvalidFieldError(field, f"{value!r} must not contain '/'")
    
    parts = value.split("/")
    for part in parts:
        if "?" in part or "#" in part:
            raise InvalidFieldError(field, f"{value!r} must not contain '?' or '#'")
        if part in ("", ".", ".."):
            raise InvalidFieldError(field, f"{value!r} has an empty or relative path segment")
    return "/".join(quote(part, safe="") for part in parts)


def resource_path(mount: str, segment: str, name: Optional[str] = None) -> str:
    """Path of a resource relative to the API root."""
    path = f"{_escape('mount', _require('mount', mount), nested=True)}/{segment}"
    if name is not None:
        if not isinstance(name, str) or not name.strip():
            raise MissingFieldError("name")
        path = f"{path}/{_escape('name', name)}"
    return path


def build_endpoint(
    method: str,
    mount: str,
    segment: str,
    name: str,
    body: Optional[dict] = None
) -> Endpoint:
    """Build a request addressing one named resource."""
    path = resource_path(mount, segment, "" if name is None else name)
    return Endpoint(method=method, path=path, body=body)


def build_list_endpoint(mount: str, segment: str) -> Endpoint:
    """Build a request listing every resource under a segment."""
    return Endpoint(method="LIST", path=resource_path(mount, segment))


def build_set_endpoint(kind: ResourceKind, mount: str, name: str, opts: Overrides = None) -> Endpoint:
    """
    Build the write request for a resource.
    
    Args:
        kind: Resource being written
        mount: Secrets engine mount point
        name: Resource name
        opts: Options overriding the kind's defaults
        
    Returns:
        POST endpoint carrying every set option
        
    Raises:
        MissingFieldError: mount, name or a required option is absent
        BuildError: opts could not be validated
    """
    path = resource_path(mount, kind.segment, name)
    options = merge_options(kind.options(), opts)
    
    for field in kind.required_fields:
        if getattr(options, field) in (None, "", []):
            raise MissingFieldError(field)
    
    body = options.model_dump(mode="json", exclude_none=True)
    return Endpoint(method="POST", path=path, body=body)
