"""Logging for the ``sales_reporting`` package.

Modules log one structured line per event, ``"<module>:<event> key=value"``,
through ``get_logger("sales_reporting.<module>")`` and never attach handlers.
Entry points (the CLI or a host service) call :func:`configure_logging` once.

Levels come from ``SALES_REPORTING_LOG_LEVEL``, which takes a package level
optionally followed by per-module overrides::

    SALES_REPORTING_LOG_LEVEL="WARNING,sql_source=DEBUG,report=INFO"

so a single noisy area (usually the SQL source) can be turned up without
flooding stderr with every report's timing line.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "sales_reporting"
LEVEL_ENV = "SALES_REPORTING_LOG_LEVEL"
# Report JSON goes to stdout; log lines go to stderr in this shape.
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"

_CONFIGURED = False


def _to_level(token: str, default: int) -> int:
    name = token.strip().upper()
    if name.isdigit():
        return int(name)
    value = logging.getLevelNamesMapping().get(name)
    return default if value is None else value


def parse_level_spec(spec: str | None, default: int = logging.INFO) -> tuple[int, dict[str, int]]:
    """Split ``"LEVEL,module=LEVEL,..."`` into a package level and overrides.

    Unknown level names fall back to ``default``; blank or malformed parts are
    ignored. Override keys are module names relative to the package.
    """

    base = default
    overrides: dict[str, int] = {}
    for part in (spec or "").split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            module, _, raw = part.partition("=")
            module = module.strip().removeprefix(f"{PACKAGE_LOGGER}.")
            if module:
                overrides[module] = _to_level(raw, default)
        else:
            base = _to_level(part, default)
    return base, overrides


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach one stream handler to the package logger (first call wins).

    ``level`` accepts an ``int`` or the same spec string as the environment
    variable; ``None`` reads ``SALES_REPORTING_LOG_LEVEL``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    if isinstance(level, int):
        base, overrides = level, {}
    else:
        base, overrides = parse_level_spec(level if level is not None else os.getenv(LEVEL_ENV))

    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    # The handler passes everything; loggers decide what is emitted.
    handler.setLevel(logging.NOTSET)
    pkg.addHandler(handler)
    pkg.setLevel(base)
    pkg.propagate = False
    for module, module_level in overrides.items():
        logging.getLogger(f"{PACKAGE_LOGGER}.{module}").setLevel(module_level)

    _CONFIGURED = True


def reset_logging() -> None:
    """Undo :func:`configure_logging` so the next call applies again."""

    global _CONFIGURED
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if name.startswith(f"{PACKAGE_LOGGER}.") and isinstance(logger, logging.Logger):
            logger.setLevel(logging.NOTSET)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if not _CONFIGURED and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "DEFAULT_FORMAT",
    "LEVEL_ENV",
    "configure_logging",
    "get_logger",
    "parse_level_spec",
    "reset_logging",
]
