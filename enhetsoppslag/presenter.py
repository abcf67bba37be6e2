"""Formatering av rapporten og feilmeldingene som vises til brukeren."""

from __future__ import annotations

from typing import List, Sequence

from .integrations.brreg_models import (
    Adresse,
    BrregError,
    BrregErrorType,
    Enhet,
    Found,
    NotFound,
    Removed,
)

__all__ = [
    "MAX_TITLE_LENGTH",
    "describe_error",
    "describe_not_found",
    "describe_removed",
    "format_report",
]

MAX_TITLE_LENGTH = 44
CHILDREN_TITLE = "Underenheter (20 første)"

_CONTINUATION = " " * MAX_TITLE_LENGTH + "  "


def _pad_title(title: str) -> str:
    return title.ljust(MAX_TITLE_LENGTH)


def _field(title: str, value: str) -> str:
    return f"{_pad_title(title)}: {value}"


def _norwegian_bool(value: bool) -> str:
    return "Ja" if value else "Nei"


def _postal_line(address: Adresse) -> str:
    code = address.postal_code or ""
    city = address.city or ""
    if code and city:
        return f"{code} {city}"
    return f"{code}{city}"


def _address_lines(title: str, address: Adresse) -> List[str]:
    """Første adresselinje står etter tittelen, resten i samme kolonne under."""

    lines: List[str] = []
    for position, line in enumerate(address.lines):
        if position == 0:
            lines.append(_field(title, line))
        else:
            lines.append(_CONTINUATION + line)
    postal = _postal_line(address)
    if lines:
        lines.append(_CONTINUATION + postal)
    else:
        lines.append(_field(title, postal))
    return lines


def _entity_summary(entity: Enhet) -> str:
    return f"{entity.orgnr} - {entity.name}"


def _children_lines(children: Sequence[Enhet]) -> List[str]:
    lines: List[str] = []
    for position, child in enumerate(children):
        if position == 0:
            lines.append(f"{_pad_title(CHILDREN_TITLE)}: {_entity_summary(child)}")
        else:
            lines.append(_CONTINUATION + _entity_summary(child))
    return lines


def format_report(found: Found) -> List[str]:
    """Bygger rapportlinjene for en funnet enhet."""

    entity = found.entity
    label = found.kind.label
    lines = [
        f"********************** {label} **********************",
        _field("Orgnummer", entity.orgnr),
        _field("Navn", entity.name),
    ]
    if entity.deletion_date is not None:
        lines.append(_field("Slettedato", entity.deletion_date))
    if entity.business_address is not None:
        lines.extend(_address_lines("Forretningsadresse", entity.business_address))
    if entity.postal_address is not None:
        lines.extend(_address_lines("Postadresse", entity.postal_address))
    if entity.homepage is not None:
        lines.append(_field("Hjemmeside", entity.homepage))
    if entity.registration_date is not None:
        lines.append(_field("Registrert i Enhetsregisteret", entity.registration_date))
    if entity.under_dissolution is not None:
        lines.append(
            _field("Under avvikling", _norwegian_bool(entity.under_dissolution))
        )
    if entity.under_forced_dissolution is not None:
        lines.append(
            _field(
                "Under tvangsavvikling eller tvangsoppløsning",
                _norwegian_bool(entity.under_forced_dissolution),
            )
        )
    if found.parent is not None:
        lines.append(_field("Overordnet enhet", _entity_summary(found.parent)))
    if found.children:
        lines.extend(_children_lines(found.children))
    return lines


def describe_not_found(outcome: NotFound) -> List[str]:
    return ["Fant ikke denne enheten i brreg"]


def describe_removed(outcome: Removed) -> List[str]:
    removed = outcome.removed
    return [
        "Denne enheten er fjernet fra brreg",
        _field(outcome.kind.label, removed.orgnr),
        _field("Slettedato", removed.deletion_date),
    ]


def describe_error(error: BrregError) -> str:
    """Brukerrettet melding for en feil som avbryter oppslaget."""

    detail = error.detail or error.error_type.value
    if error.error_type in (BrregErrorType.NOT_FOUND, BrregErrorType.GONE):
        return f"Inkonsistent svar fra brreg: {detail}"
    if error.error_type is BrregErrorType.INTERNAL_SERVER_ERROR:
        return f"Trøbbel i tårnet hos brreg: {detail}"
    if error.error_type is BrregErrorType.NETWORK_ERROR:
        return f"Feil under kommunikasjon med brreg: {detail}"
    if error.error_type is BrregErrorType.UNEXPECTED_RESPONSE:
        return f"Uventet svar fra brreg: {detail}"
    if error.error_type is BrregErrorType.JSON_PARSE_ERROR:
        return f"Klarte ikke lese svaret fra brreg: {detail}"
    raise ValueError(f"Ukjent feiltype: {error.error_type!r}")
