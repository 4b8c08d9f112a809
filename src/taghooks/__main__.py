"""Inspect a hooks registry file

Usage:
    python -m taghooks hooks.yaml
    python -m taghooks hooks.yaml --json
    TAGHOOKS_REGISTRY=hooks.yaml python -m taghooks
"""

import argparse
import json
import sys

from taghooks.config import Config, ConfigurationError
from taghooks.core.debug import dump_registry, format_registry
from taghooks.core.hooks import Hooks
from taghooks.core.loader import load_hook_registry, register_from_registry
from taghooks.logging_config import setup_logging


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="taghooks",
        description="Load a hooks YAML file and print the resulting registry",
    )
    parser.add_argument(
        "registry", nargs="?", default=None,
        help="hooks YAML file (default: TAGHOOKS_REGISTRY)"
    )
    parser.add_argument(
        "--json", action="store_true",
        help="print the registry as JSON"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="log skipped entries and registrations"
    )
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging()

    try:
        path = args.registry or Config.require_registry_path()
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    hooks = Hooks()
    register_from_registry(hooks, load_hook_registry(path))

    if args.json:
        print(json.dumps(dump_registry(hooks.registry), ensure_ascii=False, indent=2))
    else:
        print(format_registry(hooks.registry))
    return 0


if __name__ == "__main__":
    sys.exit(main())
