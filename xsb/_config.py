"""
Konfiguracja CLI xsb — zmienne środowiskowe z wartościami domyślnymi.

Zmienne:
  XSB_PROFILES    domyślne pliki profili dla --profile (oddzielone os.pathsep)
  XSB_LOG_LEVEL   poziom logowania (domyślnie WARNING)

Opcjonalnie plik .env w katalogu głównym projektu:
  XSB_PROFILES=profiles/cmi5.json
"""

from __future__ import annotations

import os
import pathlib

from dotenv import load_dotenv

ROOT = pathlib.Path(__file__).resolve().parent.parent


def load_env() -> None:
    load_dotenv(ROOT / ".env", override=True)


def profile_paths() -> list[str]:
    raw = os.getenv("XSB_PROFILES", "")
    return [p for p in raw.split(os.pathsep) if p.strip()]


def log_level() -> str:
    return os.getenv("XSB_LOG_LEVEL", "WARNING").upper()
