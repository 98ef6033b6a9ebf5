"""Command line access to the resolved environment.

USAGE:
    envscope [options] show [--format table|json]
    envscope [options] get KEY [--default VALUE]
    envscope [options] resource PATH

OPTIONS:
    --config-path DIR      Properties directory (repeatable; default: ENVSCOPE_CONFIG_PATH or ./config)
    --resource-path DIR    Resource directory (repeatable; default: the properties directories)
    --env-file FILE        dotenv file with process settings
    -D KEY=VALUE           Process setting (repeatable); overrides existing properties
    --container KEY=VALUE  Hosting-container entry (repeatable)
    -v, --verbose          Log the load sequence

EXIT CODES:
    0  success
    1  missing key or resource
    2  malformed properties file or invalid configuration
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from envscope.config import EnvscopeSettings
from envscope.environment import Environment
from envscope.exceptions import (
    ConfigurationError,
    MissingKeyError,
    ResourceNotFoundError,
    ValidationError,
)
from envscope.logger import create_logger

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG = 2


def _parse_pairs(values: Optional[List[str]], flag: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"{flag} expects KEY=VALUE, got {item!r}")
        pairs[key] = value
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envscope",
        description="Inspect the environment name, properties and resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  Show the active environment and every property:
    %(prog)s --config-path config show

  Read one value with a process override:
    %(prog)s -D db.url=jdbc:h2:mem get db.url

  Resolve a resource for production:
    ENVSCOPE_ENV=production %(prog)s resource /hibernate.cfg.xml
        """,
    )
    parser.add_argument("--config-path", action="append", type=Path, help="Properties directory")
    parser.add_argument("--resource-path", action="append", type=Path, help="Resource directory")
    parser.add_argument("--env-file", type=Path, help="dotenv file with process settings")
    parser.add_argument(
        "-D", dest="settings", action="append", metavar="KEY=VALUE", help="Process setting"
    )
    parser.add_argument(
        "--container", action="append", metavar="KEY=VALUE", help="Hosting-container entry"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log the load sequence")

    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Show environment name, source and properties")
    show.add_argument("--format", choices=["table", "json"], default="table")

    get = subparsers.add_parser("get", help="Print one property value")
    get.add_argument("key")
    get.add_argument("--default", help="Value printed when the key is undefined")

    resource = subparsers.add_parser("resource", help="Resolve a resource path")
    resource.add_argument("path")

    return parser


def _settings_from_args(args: argparse.Namespace) -> EnvscopeSettings:
    settings = EnvscopeSettings.from_env(config_path=args.config_path)
    if args.resource_path:
        settings = replace(settings, resource_path=list(args.resource_path))
    if args.env_file:
        settings = replace(settings, env_file=args.env_file)
    return settings


def _show(environment: Environment, output_format: str) -> None:
    if output_format == "json":
        print(
            json.dumps(
                {
                    "environment": str(environment.name),
                    "source": environment.source,
                    "properties": environment.as_dict(),
                },
                indent=2,
                sort_keys=True,
            )
        )
        return

    print(f"Environment: {environment.name} (source: {environment.source})")
    keys = environment.keys()
    if not keys:
        print("No properties defined")
        return
    width = max(len(k) for k in keys)
    for key in keys:
        print(f"  {key:<{width}}  {environment.get(key)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        process_settings = _parse_pairs(args.settings, "-D")
        container_config = _parse_pairs(args.container, "--container")
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    logger = create_logger("envscope-cli", level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        environment = Environment.build(
            settings=_settings_from_args(args),
            process_settings=process_settings,
            container_config=container_config,
            logger=logger,
        )
    except (ConfigurationError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    try:
        if args.command == "show":
            _show(environment, args.format)
        elif args.command == "get":
            if args.default is not None:
                print(environment.get_or_default(args.key, args.default))
            else:
                print(environment.get(args.key))
        elif args.command == "resource":
            location = environment.get_resource(args.path)
            print(f"{location.path} ({location.scope.value})")
    except (MissingKeyError, ResourceNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
