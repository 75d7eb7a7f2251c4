"""Exceptions raised by quiremap."""

from __future__ import annotations


class QuiremapError(Exception):
    """Base class for all quiremap errors."""


class QuireValidationError(QuiremapError, ValueError):
    """A quire's leaves violate a structural rule and cannot be diagrammed."""


class OddBifoliaCount(QuireValidationError):
    """
    The number of leaves not marked single is odd, so at least one paired
    leaf has no partner.
    """

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"The number of non-single leaves cannot be odd; found: {count}")


class ManuscriptFormatError(QuiremapError, ValueError):
    """A manuscript description file is malformed."""
