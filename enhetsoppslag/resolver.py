"""Oppslag av en enhet med overordnet enhet og underenheter.

Rekkefølgen er fast og hvert steg avhenger av det forrige:

1. ``enheter/{orgnr}``; ved 404 forsøkes ``underenheter/{orgnr}``.
2. Overordnet enhet, hvis enheten peker på en.
3. Underenheter, kun for hovedenheter.

404 og 410 er gyldige utfall når de gjelder orgnummeret brukeren spurte
etter. Gjelder de en enhet registeret selv refererte til, er svaret
inkonsistent og oppslaget feiler.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Tuple, Union

from .integrations.brreg_client import is_valid_orgnr
from .integrations.brreg_decoder import (
    parse_children,
    parse_entity,
    parse_fault,
    parse_removed_entity,
)
from .integrations.brreg_models import (
    BrregError,
    BrregErrorType,
    Enhet,
    EntityKind,
    Found,
    NotFound,
    RawResponse,
    Removed,
    ResolutionOutcome,
)

__all__ = ["GENERIC_FAULT_MESSAGE", "RegistryClient", "resolve"]

_LOGGER = logging.getLogger(__name__)

GENERIC_FAULT_MESSAGE = "Fikk en uleselig 500-feil fra brreg"


class RegistryClient(Protocol):
    def fetch_entity(self, orgnr: str, kind: EntityKind) -> RawResponse: ...

    def fetch_children(self, parent_orgnr: str) -> RawResponse: ...


def _failure(response: RawResponse) -> BrregError:
    """Feil for statuser som aldri er et gyldig utfall, uansett kallsted."""

    if response.status_code == 500:
        fault = parse_fault(response.body)
        detail = fault.describe() if fault is not None else GENERIC_FAULT_MESSAGE
        return BrregError(BrregErrorType.INTERNAL_SERVER_ERROR, detail)
    return BrregError(
        BrregErrorType.UNEXPECTED_RESPONSE,
        f"Fikk statuskode {response.status_code}",
    )


def _referenced_failure(response: RawResponse, description: str) -> BrregError:
    if response.status_code == 404:
        return BrregError(
            BrregErrorType.NOT_FOUND, f"{description} finnes ikke", referenced=True
        )
    if response.status_code == 410:
        return BrregError(
            BrregErrorType.GONE, f"{description} er fjernet", referenced=True
        )
    return _failure(response)


def _lookup_subject(
    client: RegistryClient, orgnr: str, kind: EntityKind
) -> Union[Enhet, Removed, None]:
    """Slår opp orgnummeret brukeren spurte etter. ``None`` betyr 404."""

    response = client.fetch_entity(orgnr, kind)
    if response.status_code == 200:
        return parse_entity(response.body)
    if response.status_code == 404:
        return None
    if response.status_code == 410:
        return Removed(kind, parse_removed_entity(response.body))
    raise _failure(response)


def _resolve_parent(client: RegistryClient, entity: Enhet) -> Optional[Enhet]:
    if entity.parent_orgnr is None:
        return None
    _LOGGER.debug("Henter overordnet enhet %s", entity.parent_orgnr)
    response = client.fetch_entity(entity.parent_orgnr, EntityKind.MAIN_UNIT)
    if response.status_code == 200:
        return parse_entity(response.body)
    raise _referenced_failure(
        response,
        f"Overordnet enhet {entity.parent_orgnr} for {entity.orgnr}",
    )


def _resolve_children(client: RegistryClient, orgnr: str) -> Tuple[Enhet, ...]:
    _LOGGER.debug("Henter underenheter for %s", orgnr)
    response = client.fetch_children(orgnr)
    if response.status_code == 200:
        return parse_children(response.body)
    raise _referenced_failure(response, f"Underenhetssøket for {orgnr}")


def resolve(orgnr: str, client: RegistryClient) -> ResolutionOutcome:
    """Slår opp ``orgnr`` og returnerer ``Found``, ``NotFound`` eller ``Removed``.

    Alle andre feil, inkludert inkonsistente svar for overordnet enhet eller
    underenheter, heves som ``BrregError``.
    """

    if not is_valid_orgnr(orgnr):
        raise ValueError("Organisasjonsnummer må bestå av 9 sifre.")

    kind = EntityKind.MAIN_UNIT
    subject = _lookup_subject(client, orgnr, kind)
    if subject is None:
        _LOGGER.debug("%s finnes ikke som enhet, prøver underenhet", orgnr)
        kind = EntityKind.SUB_UNIT
        subject = _lookup_subject(client, orgnr, kind)
        if subject is None:
            return NotFound(orgnr)

    if isinstance(subject, Removed):
        return subject

    parent = _resolve_parent(client, subject)
    children = None
    if kind is EntityKind.MAIN_UNIT:
        children = _resolve_children(client, orgnr)
    return Found(kind, subject, parent, children)
