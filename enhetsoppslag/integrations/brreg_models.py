"""Datatyper for Brønnøysund-integrasjonen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

__all__ = [
    "Adresse",
    "BrregError",
    "BrregErrorType",
    "BrregFault",
    "Enhet",
    "EntityKind",
    "Found",
    "NotFound",
    "RawResponse",
    "Removed",
    "ResolutionOutcome",
    "SlettetEnhet",
]


class EntityKind(str, Enum):
    """Enhetstype. Verdien er stisegmentet i API-et."""

    MAIN_UNIT = "enhet"
    SUB_UNIT = "underenhet"

    @property
    def label(self) -> str:
        return "Organisasjon" if self is EntityKind.MAIN_UNIT else "Underenhet"


class BrregErrorType(str, Enum):
    NOT_FOUND = "not_found"
    GONE = "gone"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    NETWORK_ERROR = "network_error"
    UNEXPECTED_RESPONSE = "unexpected_response"
    JSON_PARSE_ERROR = "json_parse_error"


class BrregError(Exception):
    """Feil fra et oppslag mot Enhetsregisteret som ikke kan foldes inn i et utfall.

    ``referenced`` er satt når en 404/410 gjaldt en enhet som registeret selv
    pekte på (overordnet enhet eller underenheter), altså et inkonsistent svar.
    """

    def __init__(
        self,
        error_type: BrregErrorType,
        detail: Optional[str] = None,
        *,
        referenced: bool = False,
    ) -> None:
        super().__init__(detail or error_type.value)
        self.error_type = error_type
        self.detail = detail
        self.referenced = referenced

    def __repr__(self) -> str:
        return (
            f"BrregError({self.error_type.value!r}, {self.detail!r}, "
            f"referenced={self.referenced})"
        )


@dataclass(frozen=True)
class RawResponse:
    """Rått HTTP-svar: statuskode og tekstlig body."""

    status_code: int
    body: str


@dataclass(frozen=True)
class Adresse:
    lines: Tuple[str, ...] = ()
    postal_code: Optional[str] = None
    city: Optional[str] = None


@dataclass(frozen=True)
class Enhet:
    """Øyeblikksbilde av en registrert enhet slik Enhetsregisteret returnerer den."""

    orgnr: str
    name: str
    deletion_date: Optional[str] = None
    registration_date: Optional[str] = None
    business_address: Optional[Adresse] = None
    postal_address: Optional[Adresse] = None
    under_dissolution: Optional[bool] = None
    under_forced_dissolution: Optional[bool] = None
    homepage: Optional[str] = None
    parent_orgnr: Optional[str] = None


@dataclass(frozen=True)
class SlettetEnhet:
    """Minimal post for en enhet som er slettet fra registeret (HTTP 410)."""

    orgnr: str
    deletion_date: str


@dataclass(frozen=True)
class BrregFault:
    """Feilkonvolutten Brønnøysund returnerer ved 500-feil."""

    trace: str
    error: str
    message: str

    def describe(self) -> str:
        return f"{self.trace}: {self.error} {self.message}"


@dataclass(frozen=True)
class Found:
    kind: EntityKind
    entity: Enhet
    parent: Optional[Enhet] = None
    children: Optional[Tuple[Enhet, ...]] = None


@dataclass(frozen=True)
class NotFound:
    orgnr: str


@dataclass(frozen=True)
class Removed:
    kind: EntityKind
    removed: SlettetEnhet


ResolutionOutcome = Union[Found, NotFound, Removed]
