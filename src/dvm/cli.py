"""
Command line entry point: map a token dictionary onto a value field.

    dvm-map tokens.json --value-field value_darkMode --value-field value
    dvm-map tokens.json --platform-config platforms.yaml --platform android --output-dir build/
    dvm-map tokens.json --platform-config platforms.yaml --platform android --report --value-field value_hiContrast
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dvm.analyzer import analyze_dictionary, format_report
from dvm.build import write_platform
from dvm.config import PlatformConfigError, load_platform_config
from dvm.mapper import ValueMappingError, map_dictionary_value
from dvm.model import DEFAULT_VALUE_TRANSFORM_FIELDS, Platform
from dvm.serialization import DictionaryFormatError, dump_dictionary, load_dictionary
from dvm.tree import TreeStructureError


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dvm-map",
        description="Select one value field per token property and prune the rest",
    )
    parser.add_argument("dictionary", help="Path to a .json/.yaml token dictionary")
    parser.add_argument(
        "--value-field",
        action="append",
        dest="value_fields",
        metavar="NAME",
        help="Candidate value field, highest priority first (repeatable)",
    )
    parser.add_argument("--platform-config", help="YAML/JSON file defining platforms")
    parser.add_argument("--platform", help="Platform name within --platform-config")
    parser.add_argument(
        "--recognized-field",
        action="append",
        dest="recognized_fields",
        metavar="NAME",
        help="Recognized value field when no platform config is given (repeatable)",
    )
    parser.add_argument("--format", choices=["json", "yaml"], default="json")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--output-dir", help="Directory for the platform's files")
    parser.add_argument("--report", action="store_true", help="Print an analysis report instead")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_platform(args: argparse.Namespace) -> Platform:
    if args.platform_config:
        platforms = load_platform_config(args.platform_config)
        if args.platform:
            if args.platform not in platforms:
                raise PlatformConfigError(
                    f"Unknown platform '{args.platform}'; defined: {', '.join(sorted(platforms))}"
                )
            return platforms[args.platform]
        if len(platforms) == 1:
            return next(iter(platforms.values()))
        raise PlatformConfigError("Config defines several platforms; choose one with --platform")

    fields = args.recognized_fields or list(DEFAULT_VALUE_TRANSFORM_FIELDS)
    # Candidates are always recognized when no config says otherwise.
    for name in args.value_fields or []:
        if name not in fields:
            fields.append(name)
    return Platform(name="cli", value_transform_fields=fields)


def run(args: argparse.Namespace) -> int:
    if args.value_fields and args.output_dir and not args.report:
        raise PlatformConfigError(
            "--output-dir builds the platform's files; use --output with --value-field"
        )

    platform = _resolve_platform(args)
    dictionary = load_dictionary(args.dictionary, platform.value_transform_fields)

    if args.report:
        report = analyze_dictionary(dictionary, platform, args.value_fields)
        print(format_report(report))
        return 0

    if args.value_fields:
        mapped = map_dictionary_value(dictionary, args.value_fields, platform)
        output = dump_dictionary(mapped, args.format)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
        else:
            print(output)
        return 0

    if not platform.files:
        raise PlatformConfigError("No --value-field given and the platform defines no files")
    written = write_platform(dictionary, platform, args.output_dir or ".")
    for destination, path in written.items():
        print(f"{destination} -> {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except (
        ValueMappingError,
        TreeStructureError,
        PlatformConfigError,
        DictionaryFormatError,
        FileNotFoundError,
    ) as e:
        log.debug("Mapping failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
