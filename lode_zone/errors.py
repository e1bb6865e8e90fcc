"""
Zone engine exceptions.

Usage/release on a stale zone id is ignored and logged, so there is no
unknown-zone error.
"""


class ZoneError(Exception):
    """Base class for zone engine errors"""
    pass


class InvalidStateError(ZoneError):
    """Raised when selecting from an empty or uninitialized zone layout"""
    pass
