"""Komenda: xsb validate — waliduje wyrażenie xAPI względem szablonu profilu."""

from __future__ import annotations

import argparse
import dataclasses
import json

from rich import box
from rich.table import Table

from lookup import LookupFailure
from profile_model import StructuralError

from ._common import add_profile_argument, console, load_registration, read_json


def run(args: argparse.Namespace) -> None:
    statement    = read_json(args.statement, "wyrażenie")
    registration = load_registration(args.profiles)

    try:
        validator = registration.validator_for(args.template)
        report    = validator.check(statement)
    except (LookupFailure, StructuralError) as exc:
        console.print(f"[red]BŁĄD[/red]  {exc}")
        raise SystemExit(1)

    if args.json_output:
        out = {
            "template_id": report.template_id,
            "is_valid": report.is_valid,
            "errors": [dataclasses.asdict(e) for e in report.errors],
            "warnings": report.warnings,
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))
    elif report.is_valid:
        console.print(
            f"[green]OK[/green]  Wyrażenie spełnia szablon [bold]{report.template_id}[/bold]."
        )
    else:
        console.print(
            f"[red]BŁĄD[/red]  Szablon [bold]{report.template_id}[/bold] — "
            f"{len(report.errors)} błąd(ów)."
        )

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",      style="yellow", no_wrap=True)
        table.add_column("Ścieżka", style="cyan")
        table.add_column("Komunikat")
        table.add_column("Poprawka", style="dim")

        for e in report.errors:
            table.add_row(e.code, e.path, e.message, e.expected_fix)

        console.print(table)

    if report.warnings and not args.json_output:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            console.print(f"  [yellow]·[/yellow] {w}")

    if not report.is_valid:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje wyrażenie xAPI (JSON) względem szablonu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje wyrażenie xAPI względem szablonu profilu (etapy 1–7):

  1  czasownik
  2  typ aktywności obiektu
  3  aktywności kontekstowe (parent / grouping / category / other)
  4  typy użycia załączników
  5  obiekt jako StatementRef
  6  context.statement
  7  reguły szablonu (JSONPath)

Przykłady:
  xsb validate wyrażenie.json --template "A Template" --profile profil.json
  xsb validate wyrażenie.json --template http://example.com/t1 --json-output
        """,
    )
    p.add_argument(
        "statement",
        metavar="PLIK_WYRAŻENIA",
        help="Plik JSON z wyrażeniem xAPI.",
    )
    p.add_argument(
        "--template", "-t",
        required=True,
        metavar="SZABLON",
        help="Nazwa (prefLabel) lub IRI szablonu.",
    )
    add_profile_argument(p)
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport walidacji jako JSON na stdout.",
    )
    p.set_defaults(func=run)
