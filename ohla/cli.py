"""CLI tool for managing node profiles.

Usage:
    python -m ohla.cli add-node
    python -m ohla.cli list-nodes
    python -m ohla.cli activate-node <id>
    python -m ohla.cli delete-node <id>
"""

import sys
import getpass

from pydantic import ValidationError

from ohla.database import engine, create_db_and_tables
from ohla.errors import AppError
from ohla.schemas.node_profile import NodeProfileCreate
from ohla.services.node_store import NodeProfileStore

COMMANDS = ("add-node", "list-nodes", "activate-node", "delete-node")


def _store() -> NodeProfileStore:
    create_db_and_tables(engine)
    return NodeProfileStore(engine)


def add_node():
    """Create a node profile from interactive input."""
    store = _store()

    name = input("Name: ").strip()
    rpc_url = input("RPC URL: ").strip()
    rpc_user = input("RPC user: ").strip()
    rpc_password = getpass.getpass("RPC password: ")
    network = input("Network [mainnet]: ").strip() or "mainnet"

    try:
        data = NodeProfileCreate(
            name=name,
            rpc_url=rpc_url,
            rpc_user=rpc_user,
            rpc_password=rpc_password,
            network=network,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}")
        sys.exit(1)

    profile = store.create(data)
    print(f"\nNode profile '{profile.name}' created with id {profile.id}.")
    if profile.is_active:
        print("It is the first profile and is now active.")


def list_nodes():
    profiles = _store().list_profiles()
    if not profiles:
        print("No node profiles.")
        return
    for p in profiles:
        marker = "*" if p.is_active else " "
        print(f"{marker} {p.id}  {p.name:<20} {p.network:<10} {p.rpc_url}")


def activate_node(profile_id: str):
    _store().activate(profile_id)
    print(f"Node profile {profile_id} is now active.")


def delete_node(profile_id: str):
    _store().delete(profile_id)
    print(f"Node profile {profile_id} deleted.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m ohla.cli <command> [id]")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    command = sys.argv[1]
    try:
        if command == "add-node":
            add_node()
        elif command == "list-nodes":
            list_nodes()
        elif command in ("activate-node", "delete-node"):
            if len(sys.argv) < 3:
                print(f"Usage: python -m ohla.cli {command} <id>")
                sys.exit(1)
            if command == "activate-node":
                activate_node(sys.argv[2])
            else:
                delete_node(sys.argv[2])
        else:
            print(f"Unknown command: {command}")
            sys.exit(1)
    except AppError as e:
        print(e.message)
        sys.exit(1)


if __name__ == "__main__":
    main()
