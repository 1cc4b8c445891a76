"""
Command Line Interface

Manage database engine connections, roles and static roles from a shell.

Usage:
    vaultdb connection set my-db -f connection_url=postgresql://{{username}}:{{password}}@db:5432/app
    vaultdb role set readonly -f db_name=my-db -f 'creation_statements=["CREATE ROLE ..."]'
    vaultdb role creds readonly
    vaultdb static-role list --mount database

Vault address and credentials are read from VAULT_ADDR, VAULT_TOKEN or
VAULT_ROLE_ID/VAULT_SECRET_ID.
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel

from vaultdb.client import Client, VaultClient
from vaultdb.config import VaultConfig
from vaultdb.database import connection, role, static_role
from vaultdb.errors import ClientError

logger = logging.getLogger(__name__)

RESOURCES = {
    "connection": (connection, ("set", "read", "list", "delete", "reset", "rotate")),
    "role": (role, ("set", "read", "list", "delete", "creds")),
    "static-role": (static_role, ("set", "read", "list", "delete", "rotate", "creds")),
}


def parse_field(text: str) -> Tuple[str, Any]:
    """Parse KEY=VALUE; VALUE is read as JSON when possible, else as a string."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultdb",
        description="Manage the Vault database secrets engine",
    )
    parser.add_argument("--mount", help="Secrets engine mount point (default: $VAULT_DATABASE_MOUNT or 'database')")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    
    kinds = parser.add_subparsers(dest="kind", required=True)
    for kind, (_, actions) in RESOURCES.items():
        kind_parser = kinds.add_parser(kind, help=f"Manage {kind}s")
        action_parsers = kind_parser.add_subparsers(dest="action", required=True)
        for action in actions:
            action_parser = action_parsers.add_parser(action)
            if action == "list":
                continue
            action_parser.add_argument("name", help=f"{kind} name")
            if action == "set":
                action_parser.add_argument(
                    "-f", "--field",
                    action="append",
                    type=parse_field,
                    default=[],
                    metavar="KEY=VALUE",
                    help="Request field (repeatable)",
                )
    return parser


async def run(args: argparse.Namespace, client: Client, mount: str) -> Any:
    """Execute the parsed command and return its result."""
    operations, _ = RESOURCES[args.kind]
    
    if args.action == "list":
        return await operations.list(client, mount)
    if args.action == "set":
        return await operations.set(client, mount, args.name, dict(args.field))
    
    method = getattr(operations, args.action)
    return await method(client, mount, args.name)


def emit(result: Any) -> None:
    if result is None:
        return
    if isinstance(result, BaseModel):
        print(result.model_dump_json(indent=2))
    else:
        print(json.dumps(result, indent=2))


def main(argv: Optional[List[str]] = None, client: Optional[Client] = None) -> int:
    args = build_parser().parse_args(argv)
    
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    config = VaultConfig.from_env()
    mount = args.mount or config.mount_point
    
    async def _run():
        if client is not None:
            return await run(args, client, mount)
        async with VaultClient(config) as vault:
            return await run(args, vault, mount)
    
    try:
        result = asyncio.run(_run())
    except (ClientError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    emit(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
