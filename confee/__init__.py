"""Load ``key<delim>value`` files over defaults and read values as typed data.

This package module re-exports the public API from ``confee.core``.
"""

from confee.core.action_logging import make_update_log
from confee.core.converters import parse_addr, parse_bool, parse_port, parse_socket_addr
from confee.core.errors import ConfError, ConversionFailed, KeyNotFound, MalformedLine, SourceNotSet
from confee.core.flask_config import apply_to_flask, current_conf, load_flask_config, reload_flask_config
from confee.core.parser import pairs_to_dict, parse_document
from confee.core.store import DEFAULT_ENCODING, Conf
from confee.core.tokenizer import DEFAULT_DELIM, tokenize_line, validate_delimiter

__all__ = [
    "Conf",
    "ConfError",
    "ConversionFailed",
    "KeyNotFound",
    "MalformedLine",
    "SourceNotSet",
    "DEFAULT_DELIM",
    "DEFAULT_ENCODING",
    "tokenize_line",
    "validate_delimiter",
    "parse_document",
    "pairs_to_dict",
    "parse_addr",
    "parse_bool",
    "parse_port",
    "parse_socket_addr",
    "make_update_log",
    "apply_to_flask",
    "load_flask_config",
    "current_conf",
    "reload_flask_config",
]
