"""HTTP-klient for Enhetsregisteret hos Brønnøysundregistrene."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

import requests  # type: ignore[import-untyped, import-not-found]
from requests.adapters import HTTPAdapter  # type: ignore[import-untyped, import-not-found]
from urllib3.util.retry import Retry

from ..constants import DEFAULT_TIMEOUT, ENHETSREGISTER_API_URL, USER_AGENT
from .brreg_models import BrregError, BrregErrorType, EntityKind, RawResponse

__all__ = [
    "BrregClient",
    "combine_orgnr_parts",
    "is_valid_orgnr",
    "normalize_orgnr",
]

_LOGGER = logging.getLogger(__name__)

_ORGNR_PATTERN = re.compile(r"[0-9]{9}")
_WHITESPACE = re.compile(r"\s+")


def normalize_orgnr(parts: Iterable[str] | str) -> str:
    """Slår sammen deler av et organisasjonsnummer og fjerner mellomrom.

    Brukere skriver gjerne ``983 544 622``, enten som ett argument eller tre.
    """

    combined = combine_orgnr_parts(parts)
    if not is_valid_orgnr(combined):
        raise ValueError("Organisasjonsnummer må bestå av 9 sifre.")
    return combined


def combine_orgnr_parts(parts: Iterable[str] | str) -> str:
    """Slår sammen argumentene og fjerner alt mellomrom, uten validering."""

    if isinstance(parts, str):
        parts = [parts]
    return _WHITESPACE.sub("", "".join(parts))


def is_valid_orgnr(value: str) -> bool:
    return _ORGNR_PATTERN.fullmatch(value) is not None


def _build_adapter() -> HTTPAdapter:
    retry = Retry(total=0, read=False, redirect=0, raise_on_status=False)
    return HTTPAdapter(max_retries=retry)


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {"User-Agent": USER_AGENT, "Accept": "application/json"}
    )
    session.mount("https://", _build_adapter())
    return session


class BrregClient:
    """Gjør ett GET-kall per oppslag og returnerer statuskode og body uten tolkning.

    Transportfeil (tidsavbrudd, tilkoblingsfeil osv.) blir til
    ``BrregError(NETWORK_ERROR)`` med én gang; det gjøres aldri nye forsøk.
    """

    def __init__(
        self,
        base_url: str = ENHETSREGISTER_API_URL,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not base_url.lower().startswith("https://"):
            raise ValueError(f"Kun https er tillatt mot brreg, fikk {base_url!r}.")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else _build_session()

    def __enter__(self) -> "BrregClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def fetch_entity(self, orgnr: str, kind: EntityKind) -> RawResponse:
        """Henter én enhet eller underenhet."""

        url = f"{self.base_url}/{kind.value}er/{orgnr}"
        return self._get(url)

    def fetch_children(self, parent_orgnr: str) -> RawResponse:
        """Søker etter underenheter med angitt overordnet enhet."""

        url = f"{self.base_url}/underenheter"
        return self._get(url, params={"overordnetEnhet": parent_orgnr})

    def _get(self, url: str, params: Optional[dict[str, str]] = None) -> RawResponse:
        _LOGGER.debug("GET %s %s", url, params or "")
        try:
            response = self._session.get(
                url,
                params=params,
                timeout=self.timeout,
                allow_redirects=False,
            )
            body = response.text
        except requests.Timeout as exc:
            raise BrregError(
                BrregErrorType.NETWORK_ERROR, f"tidsavbrudd ({exc})"
            ) from exc
        except requests.ConnectionError as exc:
            raise BrregError(
                BrregErrorType.NETWORK_ERROR, f"tilkoblingsfeil ({exc})"
            ) from exc
        except requests.RequestException as exc:
            raise BrregError(
                BrregErrorType.NETWORK_ERROR, f"uventet feil ({exc})"
            ) from exc
        _LOGGER.debug("Svar %s fra %s", response.status_code, url)
        return RawResponse(response.status_code, body)
