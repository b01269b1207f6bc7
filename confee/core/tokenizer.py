"""Split one ``key<delim>value`` line into its parts."""

from confee.core.errors import MalformedLine

DEFAULT_DELIM = ":"


def validate_delimiter(delim):
    """Return ``delim`` when it is a single printable character."""
    if not isinstance(delim, str) or len(delim) != 1 or not delim.isprintable():
        raise ValueError(f"delimiter must be a single printable character, got {delim!r}")
    return delim


def tokenize_line(line, delim=DEFAULT_DELIM, line_number=0):
    """Return ``(key, value)`` split at the first ``delim`` in ``line``.

    The split happens on the raw line; only then are the key and the
    value trimmed. An empty value is allowed; a blank line, a missing
    delimiter or an empty key raises ``MalformedLine``.
    """
    if not line.strip():
        raise MalformedLine(line_number, line, "blank line")
    key, sep, value = line.partition(delim)
    if not sep:
        raise MalformedLine(line_number, line, f"missing delimiter {delim!r}")
    key = key.strip()
    if not key:
        raise MalformedLine(line_number, line, "empty key")
    return key, value.strip()
