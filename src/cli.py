"""Command-line entry point for resolving item specifics."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from src.compute_config_hash import compute_config_hash
from src.errors import ExcludedPrefix, InvalidRequest, RegistryConfigError
from src.listing_enrichment import enrich_listing
from src.load_config import load_config
from src.part_type_registry import DEFAULT_EXCLUSION_REASON, PartTypeRegistry
from src.prefix_for_ipn import prefix_for_ipn
from src.resolution_engine import ResolutionEngine
from src.resolution_report import ResolutionReport
from src.resolution_request import ResolutionRequest
from src.table_lookups import build_capabilities

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 80

EXIT_CONFIG_ERROR = 1
EXIT_INVALID_REQUEST = 2
EXIT_EXCLUDED_PREFIX = 3


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    ap = argparse.ArgumentParser(
        description="Resolve listing item specifics using part-type rule logic.",
    )
    ap.add_argument("--config", help="Path to a YAML file overriding the registry")
    ap.add_argument(
        "--log-level",
        help="Logging level (default: logging.level from config)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    resolve_p = sub.add_parser("resolve", help="Resolve a single item specific")
    resolve_p.add_argument("prefix", help="Part-type prefix or full IPN")
    resolve_p.add_argument("attribute", help='Item specific, e.g. "Fitment Type"')
    _add_confidence(resolve_p)

    enrich_p = sub.add_parser(
        "enrich", help="Resolve every item specific bound to a prefix"
    )
    enrich_p.add_argument("prefix", help="Part-type prefix or full IPN")
    _add_confidence(enrich_p)
    enrich_p.add_argument("--report", type=Path, help="Write a JSON report here")

    list_p = sub.add_parser("list", help="List prefixes or a prefix's bindings")
    list_p.add_argument("prefix", nargs="?", help="Show bindings for this prefix")

    return ap


def _add_confidence(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--confidence",
        type=int,
        default=DEFAULT_CONFIDENCE,
        help=f"Simulated AI confidence 0-100 (default: {DEFAULT_CONFIDENCE})",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the selected command."""
    args = build_parser().parse_args(argv)
    try:
        return run_command(args)
    except ExcludedPrefix as exc:
        print(f"EXCLUDED PREFIX: {exc.reason}", file=sys.stderr)
        return EXIT_EXCLUDED_PREFIX
    except InvalidRequest as exc:
        print(f"Invalid request: {exc}", file=sys.stderr)
        return EXIT_INVALID_REQUEST
    except RegistryConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR


def run_command(args: argparse.Namespace) -> int:
    """Execute a parsed command."""
    if args.config and not Path(args.config).exists():
        msg = f"Config file not found: {args.config}"
        raise RegistryConfigError(msg)

    config = load_config(args.config)
    _configure_logging(args.log_level or config["logging"]["level"])

    registry = PartTypeRegistry.from_config(config["part_types"])
    logger.debug("Config hash: %s", compute_config_hash(config))

    if args.command == "list":
        _print_registry(registry, args.prefix)
        return 0

    engine = ResolutionEngine(registry)
    capabilities = build_capabilities(config)
    prefix = prefix_for_ipn(args.prefix, registry)

    if args.command == "resolve":
        request = ResolutionRequest(prefix, args.attribute, args.confidence)
        result, trace = engine.resolve(request, capabilities)
        for entry in trace:
            print(entry)
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    resolutions = enrich_listing(engine, prefix, capabilities, args.confidence)
    for res in resolutions:
        value = res.result.value if res.result.value is not None else "-"
        print(f"{res.attribute}: {res.result.action.value} ({value})")

    if args.report:
        report = ResolutionReport(compute_config_hash(config))
        for res in resolutions:
            report.add_result(res)
        report.generate_report(str(args.report))
        print(f"Report written to: {args.report}")
    return 0


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level, format="[%(asctime)s] %(levelname)s - %(message)s"
    )
    logging.getLogger().setLevel(level)


def _print_registry(registry: PartTypeRegistry, prefix: str | None) -> None:
    if prefix is None:
        for key in registry.prefixes():
            entry = registry.entry(key)
            suffix = f" [excluded: {entry.exclusion_reason}]" if entry.excluded else ""
            print(f"{key} - {entry.name}{suffix}")
        return

    entry = registry.entry(prefix)
    if entry.excluded:
        raise ExcludedPrefix(prefix, entry.exclusion_reason or DEFAULT_EXCLUSION_REASON)
    for attribute, code in entry.attribute_rules.items():
        print(f"{attribute} ({code.value})")
