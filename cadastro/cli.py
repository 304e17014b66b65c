"""Command-line access to the record store.

Examples::

    cadastro seed
    cadastro list --search maria --status active
    cadastro create record.json
    cadastro stats
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

from cadastro.config import STORAGE_BACKENDS, CadastroConfig, StorageConfig
from cadastro.exceptions import CadastroError, ValidationError
from cadastro.generators import RecordInputGenerator
from cadastro.logging import setup_logging
from cadastro.models import StatusFilter
from cadastro.service import CadastroService
from cadastro.store.serialization import record_to_dict
from cadastro.store.storage import PostgresStorage

logger = logging.getLogger(__name__)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _read_input(path: str) -> dict[str, Any]:
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    return json.loads(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cadastro", description="Manage registration records")
    parser.add_argument(
        "--storage",
        choices=STORAGE_BACKENDS,
        default=None,
        help="Storage backend (default: $CADASTRO_STORAGE or json)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for the json backend (default: $CADASTRO_DATA_DIR or ./data)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or INFO)")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List records, newest first")
    list_cmd.add_argument("--search", default=None, help="Match name, email or CPF")
    list_cmd.add_argument(
        "--status",
        choices=[s.value for s in StatusFilter],
        default=None,
        help="Filter by status",
    )

    get_cmd = sub.add_parser("get", help="Show one record")
    get_cmd.add_argument("id")

    create_cmd = sub.add_parser("create", help="Create a record from a JSON file ('-' for stdin)")
    create_cmd.add_argument("file")

    update_cmd = sub.add_parser("update", help="Replace a record from a JSON file ('-' for stdin)")
    update_cmd.add_argument("id")
    update_cmd.add_argument("file")

    delete_cmd = sub.add_parser("delete", help="Delete a record")
    delete_cmd.add_argument("id")

    sub.add_parser("stats", help="Show summary counts")

    seed_cmd = sub.add_parser("seed", help="Populate an empty store")
    seed_cmd.add_argument(
        "--random",
        type=int,
        default=None,
        metavar="N",
        help="Create N synthetic records instead of the fixed samples",
    )
    seed_cmd.add_argument("--seed", type=int, default=None, help="Random seed for --random")

    return parser


async def run(args: argparse.Namespace, service: CadastroService) -> None:
    """Execute one parsed command against the service."""
    if args.command == "list":
        records = await service.list(search=args.search, status=args.status)
        _print_json([record_to_dict(r) for r in records])
    elif args.command == "get":
        _print_json(record_to_dict(await service.get(args.id)))
    elif args.command == "create":
        _print_json(record_to_dict(await service.create(_read_input(args.file))))
    elif args.command == "update":
        _print_json(record_to_dict(await service.update(args.id, _read_input(args.file))))
    elif args.command == "delete":
        await service.delete(args.id)
        logger.info("Record %s deleted", args.id)
    elif args.command == "stats":
        _print_json(asdict(await service.stats()))
    elif args.command == "seed":
        if args.random is None:
            seeded = await service.initialize_sample_data()
            logger.info("Sample data %s", "written" if seeded else "skipped (store not empty)")
        elif await service.store.count():
            logger.info("Synthetic data skipped (store not empty)")
        else:
            generator = RecordInputGenerator(seed=args.seed)
            for data in generator.generate_batch(args.random):
                await service.store.create(data)
            logger.info("Created %d synthetic records", args.random)


def load_config(args: argparse.Namespace) -> CadastroConfig:
    """Environment configuration with command-line overrides applied."""
    config = CadastroConfig.from_env()
    if args.storage or args.data_dir:
        config.storage = StorageConfig(
            backend=args.storage or config.storage.backend,
            data_dir=args.data_dir or config.storage.data_dir,
            blob_key=config.storage.blob_key,
        )
    if args.log_level:
        config.log_level = args.log_level
    return config


async def _run_with_startup(args: argparse.Namespace, config: CadastroConfig) -> None:
    service = CadastroService.from_config(config)
    if isinstance(service.store.storage, PostgresStorage):
        await service.store.storage.ensure_schema()
    if config.seed_sample_data:
        await service.initialize_sample_data()
    await run(args, service)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        setup_logging(config.log_level, config.log_format)
        asyncio.run(_run_with_startup(args, config))
    except ValidationError as e:
        print("Invalid record data:", file=sys.stderr)
        for err in e.errors:
            print(f"  {err.path}: {err.message}", file=sys.stderr)
        return 1
    except CadastroError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
