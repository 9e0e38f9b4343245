# rw_logging.py
# Central logging setup shared by the form, display and Streamlit app.

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_LEVEL_ENV = "RW_LOG_LEVEL"

_configured = False


def configure_logging(level=None):
    """Install a single stream handler on the ``rw`` logger tree.

    Safe to call on every Streamlit rerun; only the first call adds a handler.
    The level comes from ``level``, else ``RW_LOG_LEVEL``, else INFO.
    """
    global _configured
    root = logging.getLogger("rw")
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True
    return root


def get_logger(name):
    # keep every module under the "rw" tree so configure_logging() reaches it
    if name != "rw" and not name.startswith("rw."):
        name = f"rw.{name}"
    return logging.getLogger(name)
