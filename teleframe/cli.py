"""
Command line entry point for addon control
"""

import argparse
import logging
import sys

from .addons.control import control
from .config import Settings


def parse_args(argv=None):
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(
        prog="teleframe-addon",
        description="Manage TeleFrame addons",
    )
    parser.add_argument("command", nargs="?", help="status|enable|disable|remove|config")
    parser.add_argument("addon_name", nargs="?", help="name of the addon")
    parser.add_argument("args", nargs="*", help="arguments for the config command")
    parser.add_argument(
        "--config", dest="config_path", default=settings.config_path,
        help=f"Path to the TeleFrame config (default: {settings.config_path})",
    )
    parser.add_argument(
        "--addons-dir", default=settings.addons_dir,
        help=f"Directory holding the addons (default: {settings.addons_dir})",
    )
    parser.add_argument(
        "--log-level", default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging verbosity",
    )
    return parser.parse_args(argv)


def setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    return control(
        args.command,
        args.addon_name,
        *args.args,
        config_path=args.config_path,
        addons_dir=args.addons_dir,
    )


if __name__ == "__main__":
    sys.exit(main())
