"""Komenda: xsb template — wypisuje wyrażenie wstępnie wypełnione z szablonu."""

from __future__ import annotations

import argparse
import json

from lookup import LookupFailure
from matcher import SequenceViolation
from profile_model import StructuralError

from ._common import add_profile_argument, console, load_registration


def run(args: argparse.Namespace) -> None:
    registration = load_registration(args.profiles)

    try:
        occurrence = registration.pattern(args.pattern) if args.pattern else None
        builder    = registration.template(args.name, occurrence)
    except (LookupFailure, StructuralError, SequenceViolation) as exc:
        console.print(f"[red]BŁĄD[/red]  {exc}")
        raise SystemExit(1)

    # Bez build(): szkic nie musi jeszcze spełniać reguł szablonu
    print(json.dumps(builder.doc.to_plain(), ensure_ascii=False, indent=2))


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "template",
        help="Wypisuje wyrażenie wstępnie wypełnione z szablonu.",
    )
    p.add_argument(
        "name",
        metavar="SZABLON",
        help="Nazwa (prefLabel) lub IRI szablonu.",
    )
    p.add_argument(
        "--pattern",
        default=None,
        metavar="WZORZEC",
        help="Wzorzec, do którego wystąpienia szablon jest dokładany.",
    )
    add_profile_argument(p)
    p.set_defaults(func=run)
