"""Komenda: xsb match — dopasowuje ciąg szablonów do wzorca profilu."""

from __future__ import annotations

import argparse

from lookup import LookupFailure
from matcher import SequenceViolation
from profile_model import StructuralError

from ._common import add_profile_argument, console, load_registration


def run(args: argparse.Namespace) -> None:
    registration = load_registration(args.profiles)

    try:
        occurrence = registration.pattern(args.pattern)
        for step, name in enumerate(args.templates, start=1):
            template_id = registration.resolved_template(name).id
            try:
                occurrence.append(template_id)
            except SequenceViolation as exc:
                console.print(f"[red]{step:>3}  ODRZUCONO[/red]  {name}")
                console.print(f"[dim]{exc}[/dim]")
                raise SystemExit(1)
            console.print(f"[green]{step:>3}  OK[/green]  {name}")
        result = occurrence.status()
    except (LookupFailure, StructuralError) as exc:
        console.print(f"[red]BŁĄD[/red]  {exc}")
        raise SystemExit(1)

    colour = "green" if result.is_complete else "yellow"
    console.print(f"Status: [{colour}]{result.status.value}[/{colour}]")
    console.print(f"[dim]Rejestracja: {occurrence.registration}[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "match",
        help="Dopasowuje ciąg szablonów do wzorca profilu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Dokłada kolejne szablony do nowego wystąpienia wzorca i wypisuje
wynik każdego kroku oraz status końcowy (success / partial).

Przykład:
  xsb match --pattern "A Pattern" "A Template" "A Template" --profile profil.json
        """,
    )
    p.add_argument(
        "templates",
        nargs="+",
        metavar="SZABLON",
        help="Nazwy (prefLabel) lub IRI szablonów, w kolejności.",
    )
    p.add_argument(
        "--pattern",
        required=True,
        metavar="WZORZEC",
        help="Nazwa (prefLabel) lub IRI wzorca.",
    )
    add_profile_argument(p)
    p.set_defaults(func=run)
