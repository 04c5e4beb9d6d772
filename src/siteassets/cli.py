from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from siteassets.asset_copier import AssetCopier, CopyRunOptions
from siteassets.config import SiteConfig, load_config
from siteassets.models import CopyError
from siteassets.run_service import (
    EXIT_INVALID_CONFIG,
    EXIT_PARTIAL_FAILURES,
    EXIT_RUNTIME_OR_CONFIG_ERROR,
    EXIT_SUCCESS,
    run_asset_copy,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="siteassets", description="Copy static site assets")
    parser.add_argument("--verbose", action="store_true", help="Log every copied file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    copy_parser = subparsers.add_parser("copy", help="Copy the asset folder and content media")
    copy_parser.add_argument("--config", required=True, type=Path)
    copy_parser.add_argument("--dry-run", action="store_true")

    single_parser = subparsers.add_parser("copy-file", help="Copy individual asset or content files")
    single_parser.add_argument("--config", required=True, type=Path)
    single_parser.add_argument("paths", nargs="+", type=Path)

    validate_parser = subparsers.add_parser("validate-config", help="Validate config")
    validate_parser.add_argument("--config", required=True, type=Path)

    return parser


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("siteassets")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _print_errors(errors: list[CopyError]) -> None:
    for error in errors:
        print(f"  ! {error}", file=sys.stderr)


def _load(config_path: Path) -> SiteConfig | None:
    try:
        return load_config(config_path)
    except Exception as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return None


def cmd_validate(config_path: Path) -> int:
    config = _load(config_path)
    if config is None:
        return EXIT_INVALID_CONFIG

    print(f"Valid config: {config_path}")
    print(f"  sourceFolder={config.source_folder}")
    print(f"  destinationFolder={config.destination_folder}")
    print(f"  assetFolder={config.asset_folder}")
    print(f"  contentFolder={config.content_folder}")
    print(f"  assetIgnoreHidden={str(config.asset_ignore_hidden).lower()}")
    return EXIT_SUCCESS


def cmd_copy(config_path: Path, dry_run: bool) -> int:
    config = _load(config_path)
    if config is None:
        return EXIT_INVALID_CONFIG

    try:
        exit_code, summary = run_asset_copy(config, CopyRunOptions(dry_run=dry_run))
    except Exception as exc:
        print(f"Runtime error: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_OR_CONFIG_ERROR

    print(
        f"{config.source_folder} -> {config.destination_folder} | copied={summary.copied} "
        f"skipped={summary.skipped} failed={summary.failed}"
    )
    _print_errors(summary.errors)
    return exit_code


def cmd_copy_file(config_path: Path, paths: list[Path]) -> int:
    config = _load(config_path)
    if config is None:
        return EXIT_INVALID_CONFIG

    copier = AssetCopier(config)
    for path in paths:
        copier.copy_single_file(path)

    print(f"copied={copier.stats.copied} failed={copier.stats.failed}")
    _print_errors(copier.errors)
    return EXIT_PARTIAL_FAILURES if copier.errors else EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "validate-config":
        return cmd_validate(args.config)
    if args.command == "copy":
        return cmd_copy(config_path=args.config, dry_run=args.dry_run)
    if args.command == "copy-file":
        return cmd_copy_file(config_path=args.config, paths=args.paths)

    parser.print_help()
    return EXIT_RUNTIME_OR_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
