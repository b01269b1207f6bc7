"""Error types raised by configuration parsing and lookups."""


class ConfError(Exception):
    """Base class for recoverable configuration errors."""


class MalformedLine(ConfError, ValueError):
    """A non-blank line could not be split into a key and a value."""

    def __init__(self, line_number, content, reason="malformed line"):
        self.line_number = line_number
        self.content = content
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {content!r}")


class KeyNotFound(ConfError, LookupError):
    """Fallible lookup of a key that is not in the store."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"key not found: {key!r}")


class ConversionFailed(ConfError, ValueError):
    """The raw value of a key could not be converted to the requested type."""

    def __init__(self, key, raw_value, target_type, detail=""):
        self.key = key
        self.raw_value = raw_value
        self.target_type = target_type
        message = f"cannot convert {key!r} value {raw_value!r} to {target_type}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class SourceNotSet(ConfError):
    """``update()`` was called before a source file was attached."""

    def __init__(self):
        super().__init__("no configuration file attached; call with_source() first")
