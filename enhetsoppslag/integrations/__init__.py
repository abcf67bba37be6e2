"""Fasade for Brønnøysund-integrasjonen."""

from __future__ import annotations

from .brreg_client import BrregClient, combine_orgnr_parts, is_valid_orgnr, normalize_orgnr
from .brreg_models import (
    Adresse,
    BrregError,
    BrregErrorType,
    BrregFault,
    Enhet,
    EntityKind,
    Found,
    NotFound,
    RawResponse,
    Removed,
    ResolutionOutcome,
    SlettetEnhet,
)

__all__ = [
    "Adresse",
    "BrregClient",
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
    "combine_orgnr_parts",
    "is_valid_orgnr",
    "normalize_orgnr",
]
