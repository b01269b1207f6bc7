"""Flask integration: load a configuration file into ``app.config``.

``load_flask_config`` keeps the store on ``app.extensions["confee"]`` so
a view can call ``reload_flask_config()`` later. A failed reload leaves
both the store and ``app.config`` as they were.
"""

from flask import current_app

from confee.core.store import Conf
from confee.core.tokenizer import DEFAULT_DELIM

EXTENSION_KEY = "confee"


def apply_to_flask(app, conf, keys=None, prefix=""):
    """Copy raw values from ``conf`` into ``app.config`` and return the names set.

    Only ``keys`` are copied when given; a missing one raises ``KeyNotFound``.
    """
    names = list(conf.keys()) if keys is None else list(keys)
    values = {f"{prefix}{key}": conf.get_raw(key) for key in names}
    app.config.update(values)
    return list(values)


def load_flask_config(app, path, defaults, delim=DEFAULT_DELIM, prefix="", log_update=None):
    """Build a store from ``defaults``, update it from ``path`` and apply it to ``app``."""
    conf = Conf(defaults, delim=delim, log_update=log_update)
    conf.with_source(path).update()
    apply_to_flask(app, conf, prefix=prefix)
    app.extensions[EXTENSION_KEY] = {"conf": conf, "prefix": prefix}
    return conf


def current_conf(app=None):
    """Return the store attached by ``load_flask_config``."""
    app = app if app is not None else current_app
    try:
        return app.extensions[EXTENSION_KEY]["conf"]
    except KeyError:
        raise RuntimeError("load_flask_config() has not been called for this app") from None


def reload_flask_config(app=None):
    """Re-read the attached file and refresh ``app.config``; returns the store."""
    app = app if app is not None else current_app
    conf = current_conf(app)
    conf.update()
    apply_to_flask(app, conf, prefix=app.extensions[EXTENSION_KEY]["prefix"])
    return conf
