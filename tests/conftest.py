"""
Shared fixtures: an in-memory database secrets engine served over
httpx.MockTransport, and a client that records requests without sending them.
"""
import json
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Tuple

import httpx
import pytest

from vaultdb import Response, VaultClient, VaultConfig

TOKEN = "test-token"


class FakeVault:
    """Minimal stand-in for Vault's database secrets engine."""
    
    def __init__(self, mount: str = "database"):
        self.mount = mount
        self.connections: Dict[str, dict] = {}
        self.roles: Dict[str, dict] = {}
        self.static_roles: Dict[str, dict] = {}
        self.static_passwords: Dict[str, Tuple[str, datetime]] = {}
        self.requests: List[httpx.Request] = []
        self.resets: List[str] = []
        self.root_rotations: List[str] = []
    
    @staticmethod
    def _json(status: int, payload: dict) -> httpx.Response:
        return httpx.Response(status, json=payload)
    
    def _not_found(self) -> httpx.Response:
        return self._json(404, {"errors": []})
    
    def _data(self, data: dict, **envelope) -> httpx.Response:
        return self._json(200, {"data": data, "warnings": None, **envelope})
    
    def _keys(self, store: dict) -> httpx.Response:
        if not store:
            return self._not_found()
        return self._data({"keys": sorted(store)})
    
    def _rotate_static(self, name: str) -> None:
        self.static_passwords[name] = (uuid.uuid4().hex, datetime.now(timezone.utc))
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        
        if request.headers.get("X-Vault-Token") != TOKEN:
            return self._json(403, {"errors": ["permission denied"]})
        
        parts = request.url.path.split("/")
        # ['', 'v1', mount, segment, name?]
        if len(parts) < 4 or parts[1] != "v1" or parts[2] != self.mount:
            return self._json(404, {"errors": ["no handler for route"]})
        segment = parts[3]
        name = parts[4] if len(parts) > 4 else None
        method = request.method
        body = json.loads(request.content) if request.content else {}
        
        if segment == "config":
            if method == "LIST":
                return self._keys(self.connections)
            if method == "POST":
                self.connections[name] = body
                if "password" in body.get("connection_url", ""):
                    return self._json(200, {"warnings": ["password found in connection_url"]})
                return httpx.Response(204)
            if method == "DELETE":
                self.connections.pop(name, None)
                return httpx.Response(204)
            if name not in self.connections:
                return self._not_found()
            conn = self.connections[name]
            return self._data({
                "plugin_name": conn["plugin_name"],
                "allowed_roles": conn.get("allowed_roles", []),
                "connection_details": {
                    "connection_url": conn.get("connection_url"),
                    "username": conn.get("username"),
                    "max_open_connections": conn.get("max_open_connections", 4),
                },
                "password_policy": conn.get("password_policy", ""),
                "root_credentials_rotate_statements": conn.get("root_rotation_statements", []),
                "verify_connection": conn.get("verify_connection", True),
            })
        
        if segment in ("reset", "rotate-root"):
            if name not in self.connections:
                return self._not_found()
            (self.resets if segment == "reset" else self.root_rotations).append(name)
            return httpx.Response(204)
        
        if segment == "roles":
            if method == "LIST":
                return self._keys(self.roles)
            if method == "POST":
                self.roles[name] = body
                return httpx.Response(204)
            if method == "DELETE":
                self.roles.pop(name, None)
                return httpx.Response(204)
            if name not in self.roles:
                return self._not_found()
            return self._data({
                "creation_statements": [],
                "revocation_statements": [],
                "rollback_statements": [],
                "renew_statements": [],
                "default_ttl": 0,
                "max_ttl": 0,
                **self.roles[name],
            })
        
        if segment == "creds":
            if name not in self.roles:
                return self._not_found()
            return self._data(
                {"username": f"v-token-{name}-{uuid.uuid4().hex[:8]}", "password": uuid.uuid4().hex},
                lease_id=f"{self.mount}/creds/{name}/{uuid.uuid4().hex}",
                lease_duration=self.roles[name].get("default_ttl", 3600),
                renewable=True,
            )
        
        if segment == "static-roles":
            if method == "LIST":
                return self._keys(self.static_roles)
            if method == "POST":
                self.static_roles[name] = body
                if name not in self.static_passwords:
                    self._rotate_static(name)
                return httpx.Response(204)
            if method == "DELETE":
                self.static_roles.pop(name, None)
                self.static_passwords.pop(name, None)
                return httpx.Response(204)
            if name not in self.static_roles:
                return self._not_found()
            return self._data({
                "rotation_statements": [],
                "rotation_period": 86400,
                "last_vault_rotation": self.static_passwords[name][1].isoformat(),
                **self.static_roles[name],
            })
        
        if segment == "static-creds":
            if name not in self.static_roles:
                return self._not_found()
            password, rotated = self.static_passwords[name]
            period = self.static_roles[name].get("rotation_period", 86400)
            return self._data({
                "username": self.static_roles[name]["username"],
                "password": password,
                "last_vault_rotation": rotated.isoformat(),
                "rotation_period": period,
                "ttl": period,
            })
        
        if segment == "rotate-role":
            if name not in self.static_roles:
                return self._not_found()
            self._rotate_static(name)
            return httpx.Response(204)
        
        return self._json(404, {"errors": ["no handler for route"]})


class RecordingClient:
    """Client that records endpoints and replays canned responses."""
    
    def __init__(self, *responses: Response):
        self.responses = list(responses)
        self.sent = []
    
    async def send(self, endpoint):
        self.sent.append(endpoint)
        if self.responses:
            return self.responses.pop(0)
        return Response(status_code=204, url=f"http://vault/v1/{endpoint.path}")


@pytest.fixture
def fake_vault():
    return FakeVault()


@pytest.fixture
def vault_config():
    return VaultConfig(address="http://vault.test:8200", token=TOKEN)


@pytest.fixture
def client(fake_vault, vault_config):
    """VaultClient wired to the in-memory engine."""
    return VaultClient(vault_config, transport=httpx.MockTransport(fake_vault.handler))


@pytest.fixture
def recording_client():
    return RecordingClient()
