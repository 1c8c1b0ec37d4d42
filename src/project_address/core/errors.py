from __future__ import annotations


class AddressError(Exception):
    """Base error for project-address."""


class UpstreamError(AddressError):
    """Raised when a remote building source fails."""


class ValidationError(AddressError):
    """Raised when input validation fails."""
