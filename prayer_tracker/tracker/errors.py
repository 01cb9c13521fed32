"""
Error types raised by the tracker core.
"""


class InvalidArgument(ValueError):
    """Malformed date, month or time value passed by a caller."""
