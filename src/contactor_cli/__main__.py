"""
Contactor CLI: argparse shell + ContactService + the configured store.
Run: python -m contactor_cli <command> (from repo root, with .env or env vars set).
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from neo4j import GraphDatabase

from contactor.application import (
    ContactCreated,
    ContactorContext,
    ContactorError,
    ContactService,
    ContactStore,
    Invalid,
    PermissionDenied,
)
from contactor.config import STORE_MEMORY, STORE_NEO4J, Settings, load_settings
from contactor.infrastructure import (
    InMemoryContactStore,
    JsonFileContactStore,
    Neo4jContactStore,
    phone_normalizer,
)
from contactor_cli.parser import build_parser, contact_props, output_format

logger = logging.getLogger(__name__)


def _load_env() -> None:
    for path in (Path.cwd() / ".env", Path.home() / ".contactor" / ".env"):
        if path.exists():
            load_dotenv(path)
            break


def build_store(settings: Settings) -> ContactStore:
    if settings.store == STORE_MEMORY:
        return InMemoryContactStore()
    if settings.store == STORE_NEO4J:
        driver = GraphDatabase.driver(
            settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
        )
        return Neo4jContactStore(driver, container_id=settings.container_id)
    return JsonFileContactStore(settings.store_path)


def _emit(result: str | bytes) -> None:
    if isinstance(result, bytes):
        sys.stdout.write(result.decode("utf-8"))
    else:
        print(result)


def run(service: ContactService, args: argparse.Namespace) -> int:
    """Execute one parsed command. Returns the process exit code."""
    if args.command == "search":
        _emit(
            service.search_contacts(
                args.filter, output_format(args), output_dir=args.dir, deep=args.deep
            )
        )
    elif args.command == "list":
        _emit(service.list_contacts(output_format(args), output_dir=args.dir))
    elif args.command == "exists":
        print(service.contact_exists(args.filter, deep=args.deep))
    elif args.command == "add":
        result = service.add_contact(contact_props(args), group=args.group)
        if isinstance(result, ContactCreated):
            print(result.summary)
        elif isinstance(result, Invalid):
            print(result.reason, file=sys.stderr)
            return 2
        else:
            print(result.reason)
            return 1
    elif args.command == "update":
        result = service.update_contact(args.identifier, contact_props(args))
        if isinstance(result, Invalid):
            print(result.reason, file=sys.stderr)
            return 2
        if result:
            print(service.search_contacts(args.identifier))
        else:
            print(f"Contact with identifier {args.identifier} could not be updated.")
            return 1
    elif args.command == "remove":
        if service.remove_contact(args.identifier):
            print(f"Contact with identifier {args.identifier} successfully removed.")
        else:
            print(f"Contact with identifier {args.identifier} could not be removed.")
            return 1
    elif args.command == "groups":
        for group in service.list_groups():
            print(f"{group.identifier}\t{group.name}")
    elif args.command == "group-members":
        _emit(service.group_members(args.group_id, output_format(args), output_dir=args.dir))
    elif args.command == "group-remove":
        if service.remove_group(args.group_id):
            print(f"Group with identifier {args.group_id} successfully removed.")
        else:
            print(f"Group with identifier {args.group_id} could not be removed.")
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    _load_env()
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
        stream=sys.stderr,
    )

    try:
        store = build_store(settings)
    except ContactorError as exc:
        logger.error("Could not open contact store: %s", exc)
        print(exc, file=sys.stderr)
        return 1

    try:
        return _open_and_run(store, settings, args)
    finally:
        if isinstance(store, Neo4jContactStore):
            store.close()


def _open_and_run(store: ContactStore, settings: Settings, args: argparse.Namespace) -> int:
    try:
        context = ContactorContext.open(store)
    except PermissionDenied as exc:
        print(exc, file=sys.stderr)
        return 1
    except ContactorError as exc:
        logger.error("Could not open contact store: %s", exc)
        print(exc, file=sys.stderr)
        return 1

    service = ContactService(
        context,
        normalize_phone=phone_normalizer(settings.default_region),
        output_dir=settings.output_dir,
    )
    try:
        return run(service, args)
    except ContactorError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
