"""Generate hub-and-spoke resource names from the command line.

Prints the JSON result on stdout. A configuration file may supply the same
fields as the HTTP API payload; command-line flags override it.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

# Support both running from workspace root and tools directory
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.name_service import (  # noqa: E402
    NamingValidationError,
    ResourceTypeNotFoundError,
    UnknownSanitizationClassError,
    generate_names,
    lookup_name,
)
from tools.lib import resolve_log_level, setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def _parse_resource_type(value: str) -> tuple[str, str]:
    key, sep, short_name = value.partition("=")
    if not sep or not key or not short_name:
        raise argparse.ArgumentTypeError(f"expected KEY=SHORT_NAME, got '{value}'")
    return key, short_name


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate Azure resource names for a hub-and-spoke topology.")
    parser.add_argument("--config", help="JSON file with prefix, suffix, environment, region, customResourceTypes, ...")
    parser.add_argument("--prefix", help="Leading name segment.")
    parser.add_argument("--suffix", help="Trailing name segment.")
    parser.add_argument("--environment", help="Environment segment (e.g. prod).")
    parser.add_argument("--region", help="Region short code (e.g. weu).")
    parser.add_argument(
        "--resource-type",
        action="append",
        type=_parse_resource_type,
        default=[],
        metavar="KEY=SHORT_NAME",
        help="Custom resource type merged over the built-in table. Repeatable.",
    )
    parser.add_argument(
        "--name-suffix",
        action="append",
        default=[],
        help="Suffix used to build name variants. Repeatable.",
    )
    parser.add_argument("--created-on", help="Timestamp for the CreatedOn tag (defaults to now, UTC).")
    parser.add_argument("--lookup", metavar="RESOURCE_TYPE", help="Print only the name for this resource type.")
    parser.add_argument("--class", dest="sanitization_class", default="general", help="Sanitization class for --lookup.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr.")
    return parser


def _load_config(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise NamingValidationError("config", path, f"Config file '{path}' must contain a JSON object.")
    return data


def build_payload(args: argparse.Namespace) -> Dict[str, Any]:
    payload = _load_config(args.config)
    for field in ("prefix", "suffix", "environment", "region"):
        value = getattr(args, field)
        if value is not None:
            payload[field] = value

    if args.resource_type:
        # snake_case key wins over the camelCase alias, as in the service
        alias = payload.pop("customResourceTypes", None)
        configured = payload.get("custom_resource_types", alias)
        if configured is None:
            configured = {}
        if not isinstance(configured, Mapping):
            raise NamingValidationError(
                "custom_resource_types",
                configured,
                "custom_resource_types must be an object mapping resource types to short names.",
            )
        custom = dict(configured)
        custom.update(dict(args.resource_type))
        payload["custom_resource_types"] = custom

    if args.name_suffix:
        payload.pop("nameSuffixes", None)
        payload["name_suffixes"] = list(args.name_suffix)

    if args.created_on:
        payload.pop("createdOn", None)
        payload["created_on"] = args.created_on
    elif not payload.get("createdOn") and not payload.get("created_on"):
        payload["created_on"] = datetime.now(timezone.utc).isoformat()
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)
    setup_logging(resolve_log_level(args.verbose))

    try:
        payload = build_payload(args)
        if args.lookup:
            output: Dict[str, Any] = lookup_name(payload, args.lookup, args.sanitization_class)
        else:
            output = generate_names(payload).to_dict()
    except NamingValidationError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 2
    except ResourceTypeNotFoundError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1
    except UnknownSanitizationClassError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as exc:
        print(f"error: unable to read config: {exc}", file=sys.stderr)
        return 1

    logger.debug("Rendering output for %d top-level keys.", len(output))
    print(json.dumps(output, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
