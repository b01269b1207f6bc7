"""String-to-type converters for ``Conf.get``."""

import ipaddress

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def type_name(convert):
    """Return a readable name for a conversion target."""
    return getattr(convert, "__qualname__", None) or getattr(convert, "__name__", None) or repr(convert)


def parse_bool(text):
    """Parse on/off style words into a bool."""
    word = str(text).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def parse_addr(text):
    """Parse an IPv4 or IPv6 address."""
    return ipaddress.ip_address(str(text).strip())


def parse_port(text):
    """Parse a TCP/UDP port number."""
    port = int(str(text).strip())
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range: {port}")
    return port


def parse_socket_addr(text):
    """Parse ``host:port`` or ``[v6host]:port`` into ``(ip_address, port)``."""
    text = str(text).strip()
    if text.startswith("["):
        host, sep, port = text[1:].partition("]:")
        if not sep:
            raise ValueError(f"invalid socket address: {text!r}")
        addr = ipaddress.IPv6Address(host)
    else:
        host, sep, port = text.rpartition(":")
        if not sep or not host:
            raise ValueError(f"invalid socket address: {text!r}")
        addr = ipaddress.IPv4Address(host)
    return addr, parse_port(port)
