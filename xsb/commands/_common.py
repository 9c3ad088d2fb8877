"""Wspólne elementy komend: wczytywanie plików JSON i rejestru profili."""

from __future__ import annotations

import argparse
import json
import pathlib
from typing import Any

from rich.console import Console

from profile_model import StructuralError
from registry import ProfileRegistration
from xsb import _config

console = Console()


def read_json(path: str | pathlib.Path, what: str) -> Any:
    path = pathlib.Path(path)
    if not path.exists():
        console.print(f"[red]Brak pliku ({what}):[/red] {path}")
        raise SystemExit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Błąd parsowania JSON ({path.name}):[/red] {exc}")
        raise SystemExit(1)


def load_registration(paths: list[str] | None) -> ProfileRegistration:
    """Rejestruje profile z --profile albo z XSB_PROFILES."""
    paths = paths or _config.profile_paths()
    if not paths:
        console.print("[red]Nie podano profilu[/red] (--profile lub XSB_PROFILES).")
        raise SystemExit(1)

    registration = ProfileRegistration.builder()
    for path in paths:
        raw = read_json(path, "profil")
        try:
            registration = registration.with_profile(raw)
        except StructuralError as exc:
            console.print(f"[red]Niepoprawny profil[/red] {path}:")
            for message in exc.errors:
                console.print(f"  [red]·[/red] {message}")
            raise SystemExit(1)
    return registration


def add_profile_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--profile", "-p",
        action="append",
        dest="profiles",
        default=None,
        metavar="PLIK",
        help="Plik JSON profilu (można powtarzać; domyślnie XSB_PROFILES).",
    )
