"""
tracking/errors.py
==================
Conditions raised by the tracking core.  The HTTP layer maps them onto
client-error status codes; nothing inside the core catches them.
"""


class TrackingError(Exception):
    """Base class for every condition raised by the tracking core."""


class InvalidArgument(TrackingError):
    """Malformed input (e.g. non-numeric intersection coordinates)."""


class NotFound(TrackingError):
    """Unknown agent or intersection id."""
