"""
builder — niemutowalni budowniczowie dokumentów xAPI.

Publiczne API:
  StatementBuilder   wyrażenie / SubStatement (opcjonalnie z szablonem)
  AgentBuilder       aktor: Agent / Group
  ActivityBuilder    aktywność
  AttachmentBuilder  załącznik
  Document, DocumentKind, DisallowedField
                     trwałe drzewo pól z kontrolą dozwolonych pól
"""

from .document import ALLOWED_FIELDS, DisallowedField, Document, DocumentKind
from .agent import AgentBuilder
from .activity import ActivityBuilder
from .attachment import AttachmentBuilder
from .statement import StatementBuilder, UUID_RE, current_timestamp

__all__ = [
    "ALLOWED_FIELDS",
    "DisallowedField",
    "Document",
    "DocumentKind",
    "AgentBuilder",
    "ActivityBuilder",
    "AttachmentBuilder",
    "StatementBuilder",
    "UUID_RE",
    "current_timestamp",
]
