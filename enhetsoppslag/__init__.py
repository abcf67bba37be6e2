"""Oppslag av enheter i Enhetsregisteret ved Brønnøysundregistrene."""

from .constants import VERSION

__version__ = VERSION
