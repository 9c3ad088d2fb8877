"""
builder/document.py — niemutowalne drzewo pól jednego dokumentu xAPI.

Document jest wartością trwałą (persistent): set / update / append / delete
zwracają nowy dokument, kopiując wyłącznie węzły na ścieżce; pozostałe
gałęzie są współdzielone. Wartości wchodzące i wychodzące są kopiowane
głęboko, więc współdzielone gałęzie nigdy nie są modyfikowane w miejscu.

DocumentKind określa, które pola najwyższego poziomu są dozwolone —
próba ustawienia innego pola kończy się DisallowedField.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# Ścieżka w dokumencie, np. ("context", "contextActivities", "parent")
type Path = tuple[str | int, ...]


class DocumentKind(StrEnum):
    STATEMENT     = "Statement"
    SUB_STATEMENT = "SubStatement"
    AGENT         = "Agent"
    ACTIVITY      = "Activity"
    ATTACHMENT    = "Attachment"


# Dozwolone pola najwyższego poziomu dla rodzaju dokumentu
ALLOWED_FIELDS: dict[DocumentKind, frozenset[str]] = {
    DocumentKind.STATEMENT: frozenset({
        "id", "actor", "verb", "object", "result", "context",
        "timestamp", "stored", "authority", "version", "attachments",
    }),
    DocumentKind.SUB_STATEMENT: frozenset({
        "objectType", "actor", "verb", "object", "result", "context",
        "timestamp", "attachments",
    }),
    DocumentKind.AGENT: frozenset({
        "objectType", "name", "mbox", "mbox_sha1sum", "openid", "account", "member",
    }),
    DocumentKind.ACTIVITY: frozenset({"objectType", "id", "definition"}),
    DocumentKind.ATTACHMENT: frozenset({
        "usageType", "display", "description", "contentType",
        "length", "sha2", "fileUrl",
    }),
}


class DisallowedField(ValueError):
    """Pole niedozwolone dla danego rodzaju dokumentu."""

    def __init__(self, kind: DocumentKind, field_name: str) -> None:
        self.kind  = kind
        self.field = field_name
        super().__init__(f"Pole '{field_name}' jest niedozwolone w dokumencie {kind.value}.")


# ---------------------------------------------------------------------------
# Operacje na ścieżkach (kopiowanie ścieżki)
# ---------------------------------------------------------------------------

def _assoc(node: Any, path: Path, value: Any) -> Any:
    key, rest = path[0], path[1:]
    if isinstance(node, list) and isinstance(key, int):
        items = list(node)
        child = items[key] if key < len(items) else {}
        new = _assoc(child, rest, value) if rest else value
        if key < len(items):
            items[key] = new
        else:
            items.append(new)
        return items
    mapping = dict(node) if isinstance(node, dict) else {}
    mapping[key] = _assoc(mapping.get(key), rest, value) if rest else value
    return mapping


def _dissoc(node: Any, path: Path) -> Any:
    key, rest = path[0], path[1:]
    if isinstance(node, dict):
        if key not in node:
            return node
        mapping = dict(node)
        if rest:
            mapping[key] = _dissoc(mapping[key], rest)
        else:
            del mapping[key]
        return mapping
    if isinstance(node, list) and isinstance(key, int) and key < len(node):
        items = list(node)
        if rest:
            items[key] = _dissoc(items[key], rest)
        else:
            del items[key]
        return items
    return node


def _lookup(node: Any, path: Path) -> Any:
    for key in path:
        if isinstance(node, dict):
            node = node.get(key)
        elif isinstance(node, list) and isinstance(key, int) and key < len(node):
            node = node[key]
        else:
            return None
    return node


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Document:
    """
    Niemutowalny dokument xAPI określonego rodzaju.

    Użycie::

        doc = Document.of(DocumentKind.STATEMENT)
        doc = doc.set(("result", "success"), True)
        doc.get(("result", "success"))  # True
        doc.to_plain()                  # {"result": {"success": True}}
    """
    kind: DocumentKind
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, kind: DocumentKind, value: dict[str, Any] | None = None) -> "Document":
        """Tworzy dokument z (głęboko skopiowanej) wartości, sprawdzając pola."""
        data = copy.deepcopy(value) if value else {}
        for key in data:
            _check_field(kind, key)
        return cls(kind, data)

    # ------------------------------------------------------------------

    def get(self, path: Path, default: Any = None) -> Any:
        value = _lookup(self.data, path)
        return default if value is None else copy.deepcopy(value)

    def has(self, path: Path) -> bool:
        return _lookup(self.data, path) is not None

    def set(self, path: Path, value: Any) -> "Document":
        _check_field(self.kind, path[0])
        return Document(self.kind, _assoc(self.data, path, copy.deepcopy(value)))

    def update(self, path: Path, fn: Callable[[Any], Any]) -> "Document":
        return self.set(path, fn(self.get(path)))

    def append(self, path: Path, value: Any) -> "Document":
        """Dokłada wartość do listy pod ścieżką (tworzy listę gdy brak)."""
        current = self.get(path)
        if current is None:
            items: list[Any] = []
        elif isinstance(current, list):
            items = current
        else:
            items = [current]
        return self.set(path, [*items, value])

    def delete(self, path: Path) -> "Document":
        return Document(self.kind, _dissoc(self.data, path))

    def with_kind(self, kind: DocumentKind) -> "Document":
        """Ten sam dokument jako inny rodzaj (pola muszą być dozwolone)."""
        return Document.of(kind, self.data)

    def to_plain(self) -> dict[str, Any]:
        """W pełni zrealizowana, niezależna kopia drzewa."""
        return copy.deepcopy(self.data)


def _check_field(kind: DocumentKind, key: str | int) -> None:
    if key not in ALLOWED_FIELDS[kind]:
        raise DisallowedField(kind, str(key))
