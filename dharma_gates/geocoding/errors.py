"""Exceptions raised by the geocoding client."""
from __future__ import annotations


class GeocodeError(Exception):
    """Base class for geocoding failures."""


class GeocodeNotFound(GeocodeError):
    """The service answered but had no match for the address or coordinates."""


class GeocodeServiceUnavailable(GeocodeError):
    """The service could not be reached or answered with an error."""


__all__ = ["GeocodeError", "GeocodeNotFound", "GeocodeServiceUnavailable"]
