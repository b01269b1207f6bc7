"""Key/value configuration store with file overrides and typed accessors.

A ``Conf`` starts from a set of defaults and is overridden by a
``key<delim>value`` file on ``update()``. An update is applied whole or
not at all: when the file cannot be read or any non-blank line is
malformed, the store keeps every value it had before the call.

Values are kept as raw strings. ``get(key, convert)`` converts on every
call with any callable taking one string (``int``, ``float``,
``pathlib.Path``, ``ipaddress.ip_address`` ...), while ``conf[key]`` is the
unchecked path for keys the caller knows exist.

The store does no locking; share it across threads only behind the
caller's own lock.
"""

from collections.abc import Mapping
from pathlib import Path

from confee.core.converters import (
    parse_addr,
    parse_bool,
    parse_socket_addr,
    type_name,
)
from confee.core.errors import ConversionFailed, KeyNotFound, SourceNotSet
from confee.core.parser import pairs_to_dict, parse_document
from confee.core.tokenizer import DEFAULT_DELIM, validate_delimiter

DEFAULT_ENCODING = "utf-8"


def _normalize_defaults(defaults):
    """Return defaults as a dict of string keys to string values."""
    items = defaults.items() if isinstance(defaults, Mapping) else defaults
    values = {}
    for key, value in items:
        if not isinstance(key, str):
            raise TypeError(f"configuration keys must be strings, got {type(key).__name__}")
        if not key or key != key.strip():
            raise ValueError(f"configuration keys must be non-empty with no surrounding whitespace, got {key!r}")
        value = "" if value is None else str(value)
        if "\n" in value or "\r" in value:
            raise ValueError(f"value for {key!r} must be a single line")
        values[key] = value
    return values


class Conf:
    """Configuration values merged from defaults and an optional source file."""

    def __init__(self, defaults=(), delim=DEFAULT_DELIM, base_dir=None, encoding=DEFAULT_ENCODING, log_update=None):
        self._pairs = _normalize_defaults(defaults)
        self._delim = validate_delimiter(delim)
        self._source = None
        self._updated = False
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.encoding = encoding
        self.log_update = log_update

    @classmethod
    def from_pairs(cls, defaults, **kwargs):
        """Build a store from ``(key, value)`` pairs or a mapping."""
        return cls(defaults, **kwargs)

    @property
    def delim(self):
        return self._delim

    def with_delim(self, delim):
        """Set the delimiter used by the next update."""
        self._delim = validate_delimiter(delim)
        return self

    @property
    def source(self):
        return self._source

    def with_source(self, path):
        """Attach the file read by ``update()``; nothing is read yet."""
        self._source = Path(path)
        return self

    with_file = with_source

    @property
    def is_updated(self):
        """True once an update has been applied successfully."""
        return self._updated

    def update(self):
        """Read the attached file and apply its values over the current ones."""
        if self._source is None:
            raise SourceNotSet()
        try:
            content = self._source.read_text(encoding=self.encoding)
            count = self._apply(content)
        except Exception as exc:
            self._log("update", source=self._source, error=exc)
            raise
        self._log("update", source=self._source, keys=count)
        return self

    def update_from_string(self, content):
        """Apply values parsed from in-memory ``content``."""
        self._apply(content)
        return self

    def _apply(self, content):
        """Parse ``content`` fully, then merge it; returns the number of keys applied."""
        parsed = pairs_to_dict(parse_document(content, self._delim))
        self._pairs.update(parsed)
        self._updated = True
        return len(parsed)

    def _log(self, event, **fields):
        if self.log_update is not None:
            self.log_update(event, **fields)

    def get_raw(self, key):
        """Return the raw string for ``key`` or raise ``KeyNotFound``."""
        try:
            return self._pairs[key]
        except KeyError:
            raise KeyNotFound(key) from None

    def get(self, key, convert=str):
        """Return ``convert(raw)`` for ``key``.

        Raises ``KeyNotFound`` when the key is absent and
        ``ConversionFailed`` when ``convert`` raises ``ValueError`` or
        ``TypeError``. Nothing is cached, so the same key can be read as
        different types.
        """
        raw = self.get_raw(key)
        try:
            return convert(raw)
        except (ValueError, TypeError) as exc:
            raise ConversionFailed(key, raw, type_name(convert), str(exc)) from exc

    def get_or(self, key, convert=str, default=None):
        """Like ``get`` but return ``default`` for a missing key."""
        if key not in self._pairs:
            return default
        return self.get(key, convert)

    def get_str(self, key):
        return self.get(key, str)

    def get_int(self, key, minimum=None):
        """Read an integer, clamped up to ``minimum`` when given."""
        value = self.get(key, int)
        if minimum is not None and value < minimum:
            return minimum
        return value

    def get_float(self, key, minimum=None):
        """Read a float, clamped up to ``minimum`` when given."""
        value = self.get(key, float)
        if minimum is not None and value < minimum:
            return minimum
        return value

    def get_bool(self, key):
        return self.get(key, parse_bool)

    def get_path(self, key):
        """Read a path; relative values are resolved from ``base_dir`` when set."""
        path = self.get(key, Path)
        if self.base_dir is None or path.is_absolute():
            return path
        return self.base_dir / path

    def get_addr(self, key):
        return self.get(key, parse_addr)

    def get_socket_addr(self, key):
        return self.get(key, parse_socket_addr)

    def __getitem__(self, key):
        """Unchecked lookup: a missing key raises the built-in ``KeyError``."""
        return self._pairs[key]

    def __contains__(self, key):
        return key in self._pairs

    def __len__(self):
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs)

    def __eq__(self, other):
        if not isinstance(other, Conf):
            return NotImplemented
        return self._pairs == other._pairs

    __hash__ = None

    def keys(self):
        return self._pairs.keys()

    def items(self):
        return self._pairs.items()

    def as_dict(self):
        """Return a copy of the raw key/value mapping."""
        return dict(self._pairs)

    def __str__(self):
        """Render one ``key<delim> value`` line per entry.

        The text parses back to the same mapping unless a key contains the
        delimiter (the first delimiter on a line ends the key) or a value
        has surrounding whitespace, which parsing trims.
        """
        lines = []
        for key, value in self._pairs.items():
            lines.append(f"{key}{self._delim} {value}" if value else f"{key}{self._delim}")
        return "".join(line + "\n" for line in lines)

    def __repr__(self):
        return f"Conf({self._pairs!r}, delim={self._delim!r}, source={self._source!r})"
