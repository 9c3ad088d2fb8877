"""Komenda: xsb profile — wypisuje zawartość profilu xAPI."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table

from profile_model import StructuralError
from registry import ProfileIndex

from ._common import console, read_json


def _label(pref_label: dict[str, str]) -> str:
    return next(iter(pref_label.values()), "") if pref_label else ""


def run(args: argparse.Namespace) -> None:
    raw = read_json(args.profile_file, "profil")
    try:
        index = ProfileIndex(raw)
    except StructuralError as exc:
        console.print(f"[red]Niepoprawny profil:[/red] {args.profile_file}")
        for message in exc.errors:
            console.print(f"  [red]·[/red] {message}")
        raise SystemExit(1)

    profile = index.profile
    console.print(
        f"[bold]{_label(profile.pref_label) or profile.id}[/bold]  "
        f"[dim]{profile.id}[/dim]  wersja: {index.version}"
    )

    if len(profile.versions) > 1 or any(v.generated_at for v in profile.versions):
        table = Table(title="Wersje", box=box.SIMPLE, header_style="bold")
        table.add_column("IRI", style="cyan")
        table.add_column("Utworzona", style="dim")
        table.add_column("Poprzednia")
        for v in profile.versions:
            table.add_row(v.id, v.generated_at or "", ", ".join(v.was_revision_of))
        console.print(table)

    if profile.concepts:
        table = Table(title="Pojęcia", box=box.SIMPLE, header_style="bold")
        table.add_column("Typ", style="yellow", no_wrap=True)
        table.add_column("Nazwa")
        table.add_column("IRI", style="cyan")
        for c in profile.concepts:
            table.add_row(c.type.value, _label(c.pref_label), c.id)
        console.print(table)

    if profile.templates:
        table = Table(title="Szablony", box=box.SIMPLE, header_style="bold")
        table.add_column("Nazwa")
        table.add_column("IRI", style="cyan")
        table.add_column("Czasownik", style="dim")
        table.add_column("Reguły", justify="right")
        for t in profile.templates:
            table.add_row(_label(t.pref_label), t.id, t.verb or "—", str(len(t.rules)))
        console.print(table)

    if profile.patterns:
        table = Table(title="Wzorce", box=box.SIMPLE, header_style="bold")
        table.add_column("Nazwa")
        table.add_column("IRI", style="cyan")
        table.add_column("Operator", style="yellow")
        table.add_column("Główny")
        table.add_column("Członkowie", style="dim")
        for p in profile.patterns:
            table.add_row(
                _label(p.pref_label), p.id, p.kind.value,
                "tak" if p.primary else "", ", ".join(p.members),
            )
        console.print(table)

    primary = profile.primary_patterns
    if primary:
        console.print("Wzorce główne: " + ", ".join(_label(p.pref_label) or p.id for p in primary))

    console.print(
        f"[dim]Pojęć: {len(profile.concepts)}, szablonów: {len(profile.templates)}, "
        f"wzorców: {len(profile.patterns)}[/dim]"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "profile",
        help="Wypisuje pojęcia, szablony i wzorce profilu.",
    )
    p.add_argument(
        "profile_file",
        metavar="PLIK",
        help="Plik JSON profilu xAPI.",
    )
    p.set_defaults(func=run)
