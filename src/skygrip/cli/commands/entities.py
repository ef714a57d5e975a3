"""Entity commands for Skygrip CLI.

Every registered kind gets the same subcommands:

    skygrip thing add name="foo bar" description=baz
    skygrip thing get 01HV...
    skygrip thing list --limit 10
    skygrip thing search "foo"
    skygrip thing remove 01HV...

Indexes are not touched here; provision them with `skygrip index rebuild`.
"""

import argparse
import asyncio
import json
from contextlib import aclosing
from typing import Any, AsyncIterator

from ...app import create_application
from ...core.config import Config
from ...store.repositories import EntityRepository
from ...utils import optional


def add_entity_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the CRUD subcommands to a kind's parser."""
    entity_subparsers = parser.add_subparsers(dest="entity_cmd", required=True)

    add_parser = entity_subparsers.add_parser("add", help="Create and save an entity")
    add_parser.add_argument("fields", nargs="+", metavar="FIELD=VALUE", help="Field values")

    get_parser = entity_subparsers.add_parser("get", help="Show an entity by id")
    get_parser.add_argument("id", help="Entity id")

    list_parser = entity_subparsers.add_parser("list", help="List all entities")
    list_parser.add_argument("-n", "--limit", type=int, default=None, help="Stop after N entities")

    search_parser = entity_subparsers.add_parser("search", help="Full-text search")
    search_parser.add_argument("query", help="Keywords or RediSearch query")
    search_parser.add_argument("-f", "--field", default=None, help="Only match this indexed field")
    search_parser.add_argument("-n", "--limit", type=int, default=None, help="Stop after N entities")

    remove_parser = entity_subparsers.add_parser("remove", help="Delete an entity by id")
    remove_parser.add_argument("id", help="Entity id")


def handle_entity(args, config: Config) -> None:
    """Handle entity subcommands.

    Args:
        args: Parsed command arguments; ``args.command`` is the kind prefix.
        config: Application configuration.

    Raises:
        Various Skygrip exceptions.
    """
    asyncio.run(_handle_entity_async(args, config))


async def _handle_entity_async(args, config: Config) -> None:
    async with await create_application(config, build_indexes=False) as app:
        repo = app.repository(args.command)

        if args.entity_cmd == "add":
            await _add_entity(repo, args.fields)
        elif args.entity_cmd == "get":
            await _get_entity(repo, args.id)
        elif args.entity_cmd == "list":
            await _print_stream(repo, repo.fetch_all(), args.limit)
        elif args.entity_cmd == "search":
            if args.field:
                stream = repo.fetch_by_field(args.field, args.query)
            else:
                stream = repo.fetch_by_keywords(args.query)
            await _print_stream(repo, stream, args.limit)
        elif args.entity_cmd == "remove":
            await repo.remove_by_id(args.id)
            print(f"✓ Removed {repo.kind.key(args.id)}")


def parse_fields(pairs: list[str], allowed: tuple[str, ...]) -> dict[str, str]:
    """Parse FIELD=VALUE pairs.

    Raises:
        ValueError: On malformed pairs, unknown fields or an explicit id.
    """
    fields: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected FIELD=VALUE, got {pair!r}")
        if name == "id" or name not in allowed:
            raise ValueError(f"Unknown field {name!r}; expected one of {[f for f in allowed if f != 'id']}")
        fields[name] = value
    return fields


async def _add_entity(repo: EntityRepository[Any], pairs: list[str]) -> None:
    entity = repo.create(**parse_fields(pairs, repo.kind.fields))
    await repo.save(entity)
    _print_entity(repo, entity)


async def _get_entity(repo: EntityRepository[Any], entity_id: str) -> None:
    entity = await repo.fetch_by_id(entity_id)
    if not optional.is_present(entity):
        raise LookupError(f"No {repo.kind.prefix} with id {entity_id!r}")
    _print_entity(repo, entity)


async def _print_stream(repo: EntityRepository[Any], stream: AsyncIterator[Any], limit: int | None) -> None:
    # Stop before pulling past the limit so no extra page is requested
    async with aclosing(stream):
        if limit is not None and limit <= 0:
            return
        count = 0
        async for entity in stream:
            _print_entity(repo, entity)
            count += 1
            if count == limit:
                break


def _print_entity(repo: EntityRepository[Any], entity: Any) -> None:
    print(json.dumps(repo.kind.to_document(entity)))
