"""Configuration event log: one line per update attempt, size-rotated.

Lines look like::

    Oct 18 09:14:02 <confee> [confee/update] source=/etc/app.conf keys=4
    Oct 18 09:15:40 <10.0.0.5> [confee/update] source=/etc/app.conf error=MalformedLine: line 3: ...

The origin is the client address when the update runs inside a Flask
request (a reload endpoint, for instance), otherwise ``confee``.
"""

from datetime import datetime
from pathlib import Path
import os
from flask import request, has_request_context

LOG_ROTATE_MAX_BYTES = 5 * 1024 * 1024
LOG_ROTATE_BACKUP_COUNT = 5
DEFAULT_ORIGIN = "confee"
ERROR_TEXT_LIMIT = 300


def one_line(text):
    """Collapse whitespace and line breaks into single spaces."""
    return " ".join(str(text or "").split())


def event_origin():
    """Return the requesting client address, or ``confee`` outside a request."""
    if not has_request_context():
        return DEFAULT_ORIGIN
    forwarded = (request.headers.get("X-Forwarded-For") or "").split(",")[0].strip()
    return forwarded or (request.remote_addr or "").strip() or DEFAULT_ORIGIN


def describe_error(exc):
    """Return ``Type: message`` for an exception, truncated for one log line."""
    text = one_line(exc)
    summary = f"{type(exc).__name__}: {text}" if text else type(exc).__name__
    return summary[:ERROR_TEXT_LIMIT]


def rotate_log_file(path, max_bytes=LOG_ROTATE_MAX_BYTES, backup_count=LOG_ROTATE_BACKUP_COUNT):
    """Shift ``path`` -> ``path.1`` -> ... -> ``path.N`` once it reaches ``max_bytes``."""
    if max_bytes <= 0 or backup_count <= 0:
        return
    try:
        if not path.exists() or path.stat().st_size < max_bytes:
            return
        chain = [path] + [path.with_name(f"{path.name}.{n}") for n in range(1, backup_count + 1)]
        for newer, older in reversed(list(zip(chain, chain[1:]))):
            if newer.exists():
                os.replace(newer, older)
    except OSError:
        # A failed rotation only means the current file keeps growing.
        pass


def make_update_log(log_file, display_tz=None, max_bytes=LOG_ROTATE_MAX_BYTES,
                    backup_count=LOG_ROTATE_BACKUP_COUNT):
    """Build a ``log_update(event, source=None, keys=None, error=None)`` closure.

    ``Conf`` calls it after every ``update()``. Write failures are ignored
    so a read-only log directory never blocks loading configuration.
    """
    log_file = Path(log_file)

    def log_update(event, source=None, keys=None, error=None):
        timestamp = datetime.now(tz=display_tz).strftime("%b %d %H:%M:%S")
        fields = [f"{timestamp} <{one_line(event_origin())}> [confee/{one_line(event) or 'unknown'}]"]
        if source is not None:
            fields.append(f"source={one_line(source)}")
        if keys is not None:
            fields.append(f"keys={int(keys)}")
        if error is not None:
            fields.append(f"error={describe_error(error)}")
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            rotate_log_file(log_file, max_bytes=max_bytes, backup_count=backup_count)
            with log_file.open("a", encoding="utf-8") as f:
                f.write(" ".join(fields) + "\n")
        except OSError:
            pass

    return log_update
