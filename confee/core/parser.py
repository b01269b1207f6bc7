"""Parse whole configuration documents into ordered key/value pairs."""

import re

from confee.core.tokenizer import DEFAULT_DELIM, tokenize_line, validate_delimiter

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(content):
    """Split on ``\\n``, ``\\r\\n`` and ``\\r`` only; a final terminator adds no line."""
    lines = _LINE_BREAK.split(content)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_document(content, delim=DEFAULT_DELIM):
    """Parse every non-blank line of ``content`` and return the pairs in file order.

    Blank lines are skipped. The first malformed line aborts the whole
    parse with ``MalformedLine`` carrying its 1-based line number, so a
    caller never sees a partial result.
    """
    validate_delimiter(delim)
    pairs = []
    for line_number, raw in enumerate(split_lines(content), start=1):
        if not raw.strip():
            continue
        pairs.append(tokenize_line(raw, delim, line_number))
    return pairs


def pairs_to_dict(pairs):
    """Fold pairs into a dict; a repeated key keeps its last value."""
    values = {}
    for key, value in pairs:
        values[key] = value
    return values
