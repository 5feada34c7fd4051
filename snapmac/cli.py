#!/usr/bin/env python3
"""
snapmac - command-line tool for managing snap AppArmor profiles
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

import tabulate
import yaml

from . import __version__
from .config import AppArmorConfig
from .exceptions import (
    ConfigError, ProfileCommandError, ProfileFormatError, SourceUnavailableError
)
from .loader import ProfileLoader
from .naming import hook_security_tag, security_tag
from .profiles import Profile, loaded_profiles, parse_profiles, profiles_for_snap, read_profiles_source

logger = logging.getLogger('snapmac.cli')

# Exit codes
EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_BAD_FORMAT = 2
EXIT_NO_SOURCE = 3
EXIT_BAD_CONFIG = 4


class OutputFormat:
    """Output formats."""
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def format_profiles(profiles: List[Profile], output_format: str = OutputFormat.TABLE) -> str:
    """
    Format profiles for output.

    Args:
        profiles: Profiles to show
        output_format: Output format

    Returns:
        Formatted output
    """
    data = [{"name": p.name, "mode": p.mode} for p in profiles]
    if output_format == OutputFormat.JSON:
        return json.dumps(data, indent=2)
    elif output_format == OutputFormat.YAML:
        return yaml.dump(data, default_flow_style=False)
    else:
        rows = [[p.name, p.mode] for p in profiles]
        return tabulate.tabulate(rows, headers=["NAME", "MODE"], tablefmt="plain")


def build_config(args) -> AppArmorConfig:
    """Combine config file, environment and command-line overrides."""
    if args.config:
        config = AppArmorConfig.from_file(args.config)
    else:
        config = AppArmorConfig()
    config = AppArmorConfig.from_env(config)
    return config.with_overrides(
        parser_command=args.parser,
        cache_dir=args.cache_dir,
        profiles_path=args.profiles_path,
    )


def cmd_load(args, config: AppArmorConfig) -> int:
    ProfileLoader(config).load_profiles(args.paths)
    return EXIT_OK


def cmd_unload(args, config: AppArmorConfig) -> int:
    ProfileLoader(config).unload_profiles(args.names)
    return EXIT_OK


def cmd_list(args, config: AppArmorConfig) -> int:
    if args.snap:
        profiles = profiles_for_snap(args.snap, config)
    elif args.all:
        profiles = parse_profiles(read_profiles_source(config.profiles_path))
    else:
        profiles = loaded_profiles(config)
    write_output(format_profiles(profiles, args.output))
    return EXIT_OK


def write_output(text: str):
    """
    Write text to stdout, restoring undecodable bytes from the kernel listing

    Profile names are read with surrogateescape, so they are written back
    byte-for-byte instead of failing on a strict stdout encoding.
    """
    buffer = getattr(sys.stdout, 'buffer', None)
    if buffer is None:
        print(text)
        return
    sys.stdout.flush()
    buffer.write((text + "\n").encode('utf-8', errors='surrogateescape'))
    buffer.flush()


def cmd_name(args, config: AppArmorConfig) -> int:
    if args.hook:
        print(hook_security_tag(args.snap, args.app))
    else:
        print(security_tag(args.snap, args.app))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snapmac", description="Manage AppArmor profiles of confined snaps")
    parser.add_argument("--version", action="version", version=f"snapmac {__version__}")
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument("--parser", help="apparmor_parser executable")
    parser.add_argument("--cache-dir", help="Profile cache directory")
    parser.add_argument("--profiles-path", help="Kernel profile listing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # load command
    load_parser = subparsers.add_parser("load", help="Load or replace compiled profiles")
    load_parser.add_argument("paths", nargs="+", help="Profile paths")
    load_parser.set_defaults(func=cmd_load)

    # unload command
    unload_parser = subparsers.add_parser("unload", help="Remove loaded profiles")
    unload_parser.add_argument("names", nargs="+", help="Profile names")
    unload_parser.set_defaults(func=cmd_unload)

    # list command
    list_parser = subparsers.add_parser("list", help="List loaded snap profiles")
    list_parser.add_argument("-a", "--all", action="store_true", help="Include profiles not owned by snaps")
    list_parser.add_argument("-s", "--snap", help="Only profiles of this snap")
    list_parser.add_argument("-o", "--output", choices=["table", "json", "yaml"], default="table", help="Output format")
    list_parser.set_defaults(func=cmd_list)

    # name command
    name_parser = subparsers.add_parser("name", help="Print the profile name of an application")
    name_parser.add_argument("snap", help="Snap name")
    name_parser.add_argument("app", help="Application (or hook) name")
    name_parser.add_argument("--hook", action="store_true", help="Name a hook rather than an app")
    name_parser.set_defaults(func=cmd_name)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not hasattr(args, 'func'):
        parser.print_help()
        return EXIT_COMMAND_FAILED

    try:
        config = build_config(args)
        return args.func(args, config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG
    except ProfileCommandError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_COMMAND_FAILED
    except ProfileFormatError as e:
        where = f" (line {e.lineno})" if e.lineno else ""
        print(f"error: {e}{where}", file=sys.stderr)
        return EXIT_BAD_FORMAT
    except SourceUnavailableError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NO_SOURCE


if __name__ == "__main__":
    sys.exit(main())
