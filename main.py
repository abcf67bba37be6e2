"""Inngangspunkt for Enhetsoppslag."""

from __future__ import annotations


def main() -> None:
    """Start kommandolinjeverktøyet med sen import av pakken."""

    from enhetsoppslag.cli import run

    run()


if __name__ == "__main__":
    main()
