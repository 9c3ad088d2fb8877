"""builder/attachment.py — budowa załącznika wyrażenia."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from lookup import Oracle, default_oracle, resolve_id

from .document import Document, DocumentKind


def _attachment_document() -> Document:
    return Document.of(DocumentKind.ATTACHMENT)


@dataclass(frozen=True)
class AttachmentBuilder:
    doc: Document = field(default_factory=_attachment_document)
    oracle: Oracle = field(default_factory=default_oracle)

    @classmethod
    def builder(cls, value: "AttachmentBuilder | dict[str, Any] | None" = None,
                oracle: Oracle | None = None) -> "AttachmentBuilder":
        if isinstance(value, AttachmentBuilder):
            return value
        return cls(Document.of(DocumentKind.ATTACHMENT, value), oracle or default_oracle())

    def _with(self, path: tuple[str, ...], value: Any) -> "AttachmentBuilder":
        return dataclasses.replace(self, doc=self.doc.set(path, value))

    def with_usage_type(self, usage_type: str) -> "AttachmentBuilder":
        return self._with(("usageType",), resolve_id(self.oracle, usage_type, "AttachmentUsageType"))

    def with_display(self, display: str, language: str = "en-US") -> "AttachmentBuilder":
        return self._with(("display", language), display)

    def with_description(self, description: str, language: str = "en-US") -> "AttachmentBuilder":
        return self._with(("description", language), description)

    def with_content_type(self, content_type: str) -> "AttachmentBuilder":
        return self._with(("contentType",), content_type)

    def with_length(self, length: int) -> "AttachmentBuilder":
        return self._with(("length",), length)

    def with_sha2(self, sha2: str) -> "AttachmentBuilder":
        return self._with(("sha2",), sha2)

    def with_file_url(self, url: str) -> "AttachmentBuilder":
        return self._with(("fileUrl",), url)

    def build(self) -> dict[str, Any]:
        return self.doc.to_plain()
