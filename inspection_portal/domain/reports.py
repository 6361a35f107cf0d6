"""Request-scoped entities of the document and attachment pipelines."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True, slots=True)
class ForwardedCredentials:
    """Caller credentials passed through untouched to downstream hops."""

    cookie: str | None = None
    authorization: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "ForwardedCredentials":
        return cls(
            cookie=headers.get("cookie") or None,
            authorization=headers.get("authorization") or None,
        )

    def as_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.cookie:
            headers["cookie"] = self.cookie
        if self.authorization:
            headers["Authorization"] = self.authorization
        return headers

    def describe(self) -> str:
        """Presence summary safe for logs."""

        return (
            f"cookie={'yes' if self.cookie else 'no'} "
            f"authorization={'yes' if self.authorization else 'no'}"
        )


@dataclass(frozen=True, slots=True)
class ReportKind:
    """One entry of the report catalogue (e.g. ``WorkOrder``)."""

    name: str
    path_template: str
    file_prefix: str
    aliases: tuple[str, ...] = ()

    def report_path(self, entity_id: str, locale: str) -> str:
        return self.path_template.format(locale=locale, id=quote(entity_id, safe=""))

    def file_name(self, entity_id: str) -> str:
        return f"{self.file_prefix}-{entity_id}.pdf"


@dataclass(frozen=True, slots=True)
class ReportRequest:
    entity_id: str
    kind: ReportKind
    origin_url: str
    locale: str
    credentials: ForwardedCredentials = field(default_factory=ForwardedCredentials)

    @property
    def report_url(self) -> str:
        return f"{self.origin_url.rstrip('/')}{self.kind.report_path(self.entity_id, self.locale)}"

    @property
    def suggested_file_name(self) -> str:
        return self.kind.file_name(self.entity_id)


@dataclass(slots=True)
class RenderedDocument:
    content: bytes
    file_name: str
    mime_type: str = PDF_MIME_TYPE

    @property
    def content_disposition(self) -> str:
        """RFC 6266 header value; non-ASCII names also get a ``filename*`` parameter."""

        fallback = "".join(
            char if " " <= char <= "~" and char not in '"\\' else "_" for char in self.file_name
        )
        if fallback == self.file_name:
            return f'attachment; filename="{fallback}"'
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(self.file_name, safe='')}"


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    FATAL_FAILURE = "fatal_failure"


@dataclass(slots=True)
class RenderAttempt:
    attempt_number: int
    outcome: AttemptOutcome
    error_detail: str | None = None


@dataclass(frozen=True, slots=True)
class AttachmentRequest:
    """Validated input of the estimate attachment relay."""

    quickbook_estimate_id: str
    entity_id: str
    report_kind: str
    realm_id: str
