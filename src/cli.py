"""Command-line interface for xrefmaps."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

from contract.serialize import XrefMapFormatError, load_xref_map, save_xref_map
from contract.validation import validate_xref_map
from rules.config import ConfigError, XrefMapsConfig, load_config
from utils import dumps_json, format_api_url, format_release_path, write_json
from verify.links import check_xref_map_links
from xref.pipeline import fix_xref_map
from xref.resolve import SiteMode, detect_site_mode

log = logging.getLogger(__name__)

_LOG_LEVELS = ("debug", "info", "warning", "error")


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("xrefmap", help="Path to the xrefmap.yml file")
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding xrefmaps.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xrefmaps")
    parser.add_argument(
        "--loglevel",
        choices=_LOG_LEVELS,
        default="info",
        help="Logging verbosity (default: info)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fix_parser = subparsers.add_parser(
        "fix", help="Rewrite hrefs to point at the online API documentation"
    )
    _add_common_paths(fix_parser)
    fix_parser.add_argument(
        "--out",
        default=None,
        help=(
            "Where to write the fixed map; {0} is the release tag "
            "(default: overwrite the input)"
        ),
    )
    fix_parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the API documentation; {0} is the short version",
    )
    fix_parser.add_argument(
        "--version",
        default=None,
        help="Release tag substituted into the API URL (e.g. 6000.0.1f1)",
    )
    fix_parser.add_argument(
        "--trim-namespace",
        dest="trim_namespaces",
        action="append",
        default=None,
        help="Namespace removed from editor page names (repeatable)",
    )
    fix_parser.add_argument(
        "--package-regex",
        default=None,
        help="Regular expression matching package API URLs",
    )
    fix_parser.add_argument(
        "--site-mode",
        choices=[mode.value for mode in SiteMode],
        default=None,
        help="Site layout (default: detected from the API URL)",
    )
    fix_parser.add_argument(
        "--report",
        default=None,
        help="Write a JSON summary of resolved and dropped references to this path",
    )
    fix_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any reference could not be resolved",
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Check the hrefs of a fixed map without network access"
    )
    validate_parser.add_argument("xrefmap", help="Path to the xrefmap.yml file")
    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the validation messages as JSON on stdout",
    )

    test_parser = subparsers.add_parser(
        "test", help="Check that the hrefs of a fixed map exist online"
    )
    _add_common_paths(test_parser)
    test_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each request (default: config timeout)",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level.upper())


def _load_config(root: str) -> XrefMapsConfig | None:
    try:
        return load_config(Path(root).expanduser().resolve())
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return None


def _resolve_site_mode(
    args: argparse.Namespace, config: XrefMapsConfig, api_url: str
) -> SiteMode:
    if args.site_mode is not None:
        return SiteMode(args.site_mode)
    if args.package_regex is not None:
        return detect_site_mode(api_url, args.package_regex)
    return config.resolve_site_mode(api_url)


def _handle_fix(args: argparse.Namespace) -> int:
    config = _load_config(args.root)
    if config is None:
        return 2

    try:
        api_url = format_api_url(args.api_url or config.api_url, args.version)
        out = format_release_path(args.out, args.version) if args.out is not None else None
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if not api_url.endswith("/"):
        sys.stderr.write(f"error: API URL must end with '/': {api_url}\n")
        return 2

    trim_namespaces = (
        args.trim_namespaces
        if args.trim_namespaces is not None
        else config.trim_namespaces
    )
    try:
        site_mode = _resolve_site_mode(args, config, api_url)
    except re.error as exc:
        sys.stderr.write(f"error: Invalid package regex '{args.package_regex}': {exc}\n")
        return 2

    xrefmap_path = Path(args.xrefmap).expanduser().resolve()
    out_path = Path(out).expanduser().resolve() if out is not None else xrefmap_path

    try:
        xref_map = load_xref_map(xrefmap_path)
    except XrefMapFormatError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    log.info(f"Fixing hrefs in '{xrefmap_path}' for {api_url} ({site_mode.value})")
    fixed, report = fix_xref_map(xref_map, api_url, trim_namespaces, site_mode)
    save_xref_map(out_path, fixed)
    if args.report is not None:
        write_json(Path(args.report).expanduser().resolve(), report.to_dict())
    log.info(
        f"XRef map exported to '{out_path}': {len(report.references)} references, "
        f"{report.overloads_skipped} overloads skipped, {len(report.dropped)} dropped."
    )

    if args.strict and not report.ok:
        for dropped in report.dropped:
            sys.stderr.write(f"dropped: {dropped.uid}: {dropped.message}\n")
        return 1
    return 0


def _handle_validate(args: argparse.Namespace) -> int:
    result = validate_xref_map(Path(args.xrefmap).expanduser().resolve())
    if args.json:
        payload = {
            "errors": [error.to_dict() for error in result.errors],
            "warnings": [warning.to_dict() for warning in result.warnings],
        }
        sys.stdout.write(dumps_json(payload).decode("utf-8") + "\n")
        return 0 if result.ok else 1

    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_test(args: argparse.Namespace) -> int:
    config = _load_config(args.root)
    if config is None:
        return 2

    try:
        xref_map = load_xref_map(Path(args.xrefmap).expanduser().resolve())
    except XrefMapFormatError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    timeout = args.timeout if args.timeout is not None else config.timeout
    result = check_xref_map_links(xref_map, timeout=timeout)
    log.info(f"Checked {result.checked} links, {len(result.invalid)} invalid.")
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.loglevel)

    if args.command == "fix":
        return _handle_fix(args)

    if args.command == "validate":
        return _handle_validate(args)

    if args.command == "test":
        return _handle_test(args)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
