"""Tolking av JSON-svar fra Enhetsregisteret."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

from .brreg_models import Adresse, BrregError, BrregErrorType, BrregFault, Enhet, SlettetEnhet

__all__ = [
    "parse_children",
    "parse_entity",
    "parse_fault",
    "parse_removed_entity",
]

_LOGGER = logging.getLogger(__name__)


class _DecodeError(ValueError):
    pass


def _load_object(body: str) -> Dict[str, Any]:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise _DecodeError(f"ugyldig JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise _DecodeError("uventet svarformat, forventet et objekt")
    return payload


def _required_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise _DecodeError(f"feltet {key!r} mangler eller er ikke tekst")
    return value


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _DecodeError(f"feltet {key!r} er ikke tekst")
    return value


def _optional_bool(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise _DecodeError(f"feltet {key!r} er ikke en boolsk verdi")
    return value


def _optional_address(data: Dict[str, Any], key: str) -> Optional[Adresse]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise _DecodeError(f"feltet {key!r} er ikke en adresse")
    lines = value.get("adresse") or []
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        raise _DecodeError(f"adresselinjene i {key!r} er ugyldige")
    return Adresse(
        lines=tuple(lines),
        postal_code=_optional_str(value, "postnummer"),
        city=_optional_str(value, "poststed"),
    )


def _entity_from_mapping(data: Dict[str, Any]) -> Enhet:
    # Underenheter oppgir beliggenhetsadresse i stedet for forretningsadresse.
    business_address = _optional_address(data, "forretningsadresse")
    if business_address is None:
        business_address = _optional_address(data, "beliggenhetsadresse")
    return Enhet(
        orgnr=_required_str(data, "organisasjonsnummer"),
        name=_required_str(data, "navn"),
        deletion_date=_optional_str(data, "slettedato"),
        registration_date=_optional_str(data, "registreringsdatoEnhetsregisteret"),
        business_address=business_address,
        postal_address=_optional_address(data, "postadresse"),
        under_dissolution=_optional_bool(data, "underAvvikling"),
        under_forced_dissolution=_optional_bool(
            data, "underTvangsavviklingEllerTvangsopplosning"
        ),
        homepage=_optional_str(data, "hjemmeside"),
        parent_orgnr=_optional_str(data, "overordnetEnhet"),
    )


def _json_parse_error(exc: _DecodeError) -> BrregError:
    return BrregError(BrregErrorType.JSON_PARSE_ERROR, str(exc))


def parse_entity(body: str) -> Enhet:
    """Tolker et 200-svar for én enhet eller underenhet."""

    try:
        return _entity_from_mapping(_load_object(body))
    except _DecodeError as exc:
        raise _json_parse_error(exc) from exc


def parse_removed_entity(body: str) -> SlettetEnhet:
    """Tolker et 410-svar. Slettedato er påkrevd."""

    try:
        data = _load_object(body)
        return SlettetEnhet(
            orgnr=_required_str(data, "organisasjonsnummer"),
            deletion_date=_required_str(data, "slettedato"),
        )
    except _DecodeError as exc:
        raise _json_parse_error(exc) from exc


def parse_children(body: str) -> Tuple[Enhet, ...]:
    """Tolker søkesvaret for underenheter.

    Mangler ``_embedded`` helt har enheten ingen underenheter, og resultatet
    blir en tom tuple.
    """

    try:
        data = _load_object(body)
        embedded = data.get("_embedded")
        if embedded is None:
            return ()
        if not isinstance(embedded, dict):
            raise _DecodeError("feltet '_embedded' er ikke et objekt")
        children = embedded.get("underenheter")
        if not isinstance(children, list):
            raise _DecodeError("feltet 'underenheter' mangler eller er ikke en liste")
        result = []
        for child in children:
            if not isinstance(child, dict):
                raise _DecodeError("en underenhet i listen er ikke et objekt")
            result.append(_entity_from_mapping(child))
        return tuple(result)
    except _DecodeError as exc:
        raise _json_parse_error(exc) from exc


def parse_fault(body: str) -> Optional[BrregFault]:
    """Tolker feilkonvolutten fra en 500-feil, ``None`` hvis den er uleselig."""

    try:
        data = _load_object(body)
        return BrregFault(
            trace=_required_str(data, "trace"),
            error=_required_str(data, "error"),
            message=_required_str(data, "message"),
        )
    except _DecodeError as exc:
        _LOGGER.debug("Uleselig feilmelding fra brreg: %s", exc)
        return None
