"""
builder/agent.py — budowa aktora (Agent / Group).

Identyfikatory odwrotnie funkcyjne (mbox, mbox_sha1sum, openid, account)
wykluczają się: ustawienie jednego usuwa pozostałe.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from lookup import Oracle, default_oracle

from .document import Document, DocumentKind

IFI_FIELDS = ("mbox", "mbox_sha1sum", "openid", "account")


def _agent_document() -> Document:
    return Document.of(DocumentKind.AGENT, {"objectType": "Agent"})


@dataclass(frozen=True)
class AgentBuilder:
    """
    Niemutowalny budowniczy aktora.

    Użycie::

        AgentBuilder.builder().with_email("jan@example.com").with_name("Jan").build()
    """
    doc: Document = field(default_factory=_agent_document)
    oracle: Oracle = field(default_factory=default_oracle)

    @classmethod
    def builder(cls, value: "AgentBuilder | dict[str, Any] | None" = None,
                oracle: Oracle | None = None) -> "AgentBuilder":
        if isinstance(value, AgentBuilder):
            return value
        data = dict(value or {})
        data.setdefault("objectType", "Agent")
        return cls(Document.of(DocumentKind.AGENT, data), oracle or default_oracle())

    def _with(self, doc: Document) -> "AgentBuilder":
        return dataclasses.replace(self, doc=doc)

    def _with_identifier(self, name: str, value: Any) -> "AgentBuilder":
        doc = self.doc
        for ifi in IFI_FIELDS:
            if ifi != name:
                doc = doc.delete((ifi,))
        return self._with(doc.set((name,), value))

    # ------------------------------------------------------------------
    # Identyfikatory
    # ------------------------------------------------------------------

    def with_mbox(self, mbox: str) -> "AgentBuilder":
        return self._with_identifier("mbox", mbox)

    def with_email(self, email: str) -> "AgentBuilder":
        return self.with_mbox(f"mailto:{email}")

    def with_mbox_sha1sum(self, sha1sum: str) -> "AgentBuilder":
        return self._with_identifier("mbox_sha1sum", sha1sum)

    def with_openid(self, openid: str) -> "AgentBuilder":
        return self._with_identifier("openid", openid)

    def with_account(self, home_page: str, name: str) -> "AgentBuilder":
        return self._with_identifier("account", {"homePage": home_page, "name": name})

    def with_home_page(self, home_page: str) -> "AgentBuilder":
        account = self.doc.get(("account",), {})
        return self._with_identifier("account", {**account, "homePage": home_page})

    def with_account_name(self, name: str) -> "AgentBuilder":
        account = self.doc.get(("account",), {})
        return self._with_identifier("account", {**account, "name": name})

    # ------------------------------------------------------------------

    def with_name(self, name: str) -> "AgentBuilder":
        return self._with(self.doc.set(("name",), name))

    def as_group(self) -> "AgentBuilder":
        return self._with(self.doc.set(("objectType",), "Group"))

    def with_member(self, agent: "AgentBuilder | dict[str, Any]") -> "AgentBuilder":
        """Dodaje członka; aktor staje się grupą."""
        member = AgentBuilder.builder(agent, self.oracle).build()
        group  = self.as_group()
        return group._with(group.doc.append(("member",), member))

    def build(self) -> dict[str, Any]:
        return self.doc.to_plain()
