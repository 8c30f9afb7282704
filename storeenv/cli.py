"""
Command line checks for store environment settings.

Usage:
    # Validate the current environment, exit 1 on the first invalid variable
    storeenv check

    # List recognised variables with units and defaults
    storeenv describe
"""

import argparse
import logging
import os
from typing import List, Mapping, Optional

from storeenv.config import StoreEnvVars
from storeenv.errors import ConfigError
from storeenv.fields import STORE_FIELDS

logger = logging.getLogger(__name__)


def check(env: Mapping[str, str]) -> int:
    """Load settings from ``env``; return a process exit status."""
    try:
        StoreEnvVars.from_env(env)
    except ConfigError as e:
        logger.error(f"Invalid store configuration: {e}")
        return 1

    recognised = sum(1 for spec in STORE_FIELDS if spec.env_var in env)
    print(f"ok: {len(STORE_FIELDS)} settings resolved, {recognised} set in environment")
    return 0


def describe() -> int:
    width = max(len(spec.env_var) for spec in STORE_FIELDS)
    for spec in STORE_FIELDS:
        line = f"{spec.env_var:<{width}}  {spec.kind.value:<13} {spec.unit.value:<12} {spec.default_label}"
        if spec.doc:
            line += f"  # {spec.doc}"
        print(line)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="storeenv",
        description="Validate and describe store environment settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("command", choices=["check", "describe"], help="Command to run")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.command == "describe":
        return describe()
    return check(os.environ)
