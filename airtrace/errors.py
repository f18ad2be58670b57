# path: airtrace-api/airtrace/errors.py


class InvalidConfigError(ValueError):
    """A scoring parameter is out of its allowed range (caller bug, not data)."""


class RouteFormatError(ValueError):
    """Route geometry arrived in a shape the adapter does not recognise."""
