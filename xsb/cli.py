"""
xsb — narzędzie CLI dla profili xAPI.

Użycie:
  xsb [-v] <komenda> [opcje]

Komendy:
  profile    Wypisuje pojęcia, szablony i wzorce profilu.
  validate   Waliduje wyrażenie xAPI (JSON) względem szablonu.
  match      Dopasowuje ciąg szablonów do wzorca profilu.
  template   Wypisuje wyrażenie wstępnie wypełnione z szablonu.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from xsb import _config
from xsb.commands import match as cmd_match
from xsb.commands import profile as cmd_profile
from xsb.commands import template as cmd_template
from xsb.commands import validate as cmd_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xsb",
        description="xsb — budowa i walidacja wyrażeń xAPI względem profili.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="xsb 0.1.0"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logowanie na poziomie DEBUG (zamiast XSB_LOG_LEVEL).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_profile.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_match.add_parser(subparsers)
    cmd_template.add_parser(subparsers)

    return parser


def configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else _config.log_level()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main() -> None:
    # Windows: terminal może używać cp1252 — wymuszamy UTF-8 dla polskich znaków.
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")

    _config.load_env()
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
