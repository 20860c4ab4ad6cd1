"""Error types and user-facing error text for tcping."""


class TcpingError(Exception):
    """Base class for errors that abort a tcping run."""


class ConfigError(TcpingError):
    """Run configuration was rejected before probing started."""


class ResolutionError(TcpingError):
    """The target could not be turned into an endpoint."""


class EmptySequenceError(ValueError):
    """An aggregate was requested over no values."""


def format_error(err) -> str:
    """Normalize an error description for display.

    The first character is capitalised and a trailing full stop is ensured,
    whatever casing and punctuation the underlying cause used.

    Examples:
        >>> format_error("connection refused")
        'Connection refused.'
        >>> format_error("Timed out.")
        'Timed out.'
    """
    text = str(err)
    if not text:
        return text

    text = text[0].upper() + text[1:]
    if not text.endswith("."):
        text += "."
    return text
