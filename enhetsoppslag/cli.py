"""Kommandolinjeverktøy for oppslag i Enhetsregisteret."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Optional, Sequence, TextIO

from .constants import (
    APP_TITLE,
    EXIT_ERROR,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_REMOVED,
    EXIT_USAGE,
    VERSION,
)
from .integrations.brreg_client import BrregClient, combine_orgnr_parts, is_valid_orgnr
from .integrations.brreg_models import BrregError, Found, NotFound, Removed
from .presenter import describe_error, describe_not_found, describe_removed, format_report
from .resolver import RegistryClient, resolve
from .settings import get_api_url, get_log_level

__all__ = ["main", "run"]

_LOGGER = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: {message}\n")


def _build_parser(prog: Optional[str]) -> _ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        description=f"{APP_TITLE}: slå opp en enhet i Enhetsregisteret",
        epilog="Bruk --version for å vise versjonen.",
    )
    parser.add_argument(
        "orgnr",
        nargs="+",
        help="Organisasjonsnummer, gjerne med mellomrom (f.eks. 983 544 622)",
    )
    return parser


def _print_lines(lines: Sequence[str], stream: TextIO) -> None:
    for line in lines:
        print(line, file=stream)


def main(
    argv: Optional[list[str]] = None,
    *,
    client: Optional[RegistryClient] = None,
    prog: Optional[str] = None,
) -> int:
    """Slår opp ett organisasjonsnummer og returnerer exit-koden."""

    args_list = list(sys.argv[1:] if argv is None else argv)
    combined = combine_orgnr_parts(args_list)
    if combined == "--version":
        print(f"Versjon: {VERSION}")
        return EXIT_OK

    parser = _build_parser(prog)
    try:
        args = parser.parse_args(args_list)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_USAGE
    orgnr = combine_orgnr_parts(args.orgnr)
    if not is_valid_orgnr(orgnr):
        parser.print_usage(sys.stderr)
        print("(orgnr må være ni siffer)", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=get_log_level(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if client is not None:
            outcome = resolve(orgnr, client)
        else:
            with BrregClient(get_api_url()) as brreg_client:
                outcome = resolve(orgnr, brreg_client)
    except BrregError as exc:
        _LOGGER.debug("Oppslaget feilet: %r", exc)
        print(describe_error(exc), file=sys.stderr)
        return EXIT_ERROR

    if isinstance(outcome, Found):
        _print_lines(format_report(outcome), sys.stdout)
        return EXIT_OK
    if isinstance(outcome, NotFound):
        _print_lines(describe_not_found(outcome), sys.stderr)
        return EXIT_NOT_FOUND
    if isinstance(outcome, Removed):
        _print_lines(describe_removed(outcome), sys.stderr)
        return EXIT_REMOVED
    raise TypeError(f"Ukjent utfall: {outcome!r}")


def run() -> None:
    """Inngangspunkt for konsollskriptet."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - CLI brukes ved behov
    run()
