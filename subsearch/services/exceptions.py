"""Domain-specific exceptions."""

from __future__ import annotations

from enum import Enum


class ServiceError(Exception):
    pass


class FetchErrorKind(str, Enum):
    QUARANTINED = "quarantined"
    GATED = "gated"
    OTHER = "other"


class FetchError(ServiceError):
    """Raised when the upstream content API cannot serve a request."""

    kind: FetchErrorKind = FetchErrorKind.OTHER

    def __init__(self, message: str, *, kind: FetchErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class QuarantineRequired(FetchError):
    """The target community must be acknowledged before it can be listed."""

    def __init__(self, kind: FetchErrorKind) -> None:
        if kind not in (FetchErrorKind.QUARANTINED, FetchErrorKind.GATED):
            raise ValueError(f"not a quarantine kind: {kind!r}")
        super().__init__(kind.value, kind=kind)

    @classmethod
    def from_reason(cls, reason: object) -> "QuarantineRequired | None":
        if reason == FetchErrorKind.QUARANTINED.value:
            return cls(FetchErrorKind.QUARANTINED)
        if reason == FetchErrorKind.GATED.value:
            return cls(FetchErrorKind.GATED)
        return None


class UpstreamFailure(FetchError):
    pass


__all__ = [
    "FetchError",
    "FetchErrorKind",
    "QuarantineRequired",
    "ServiceError",
    "UpstreamFailure",
]
