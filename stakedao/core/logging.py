"""Central loguru configuration for stakedao."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping

from loguru import logger

PACKAGE_PREFIX = "stakedao."

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)


def _scope_matches(record_name: str, scope: str) -> bool:
    if record_name.startswith(scope):
        return True
    # Bare scopes such as "core.engine" are relative to the package.
    return not scope.startswith(PACKAGE_PREFIX) and record_name.startswith(
        f"{PACKAGE_PREFIX}{scope}"
    )


def configure_logging(
    level: str,
    *,
    debug_scopes: Iterable[str] = (),
    colorize: bool = False,
) -> tuple[int, ...]:
    """Replace loguru sinks with a stderr sink at ``level``.

    ``debug_scopes`` adds a second sink that lets DEBUG records through for
    the named modules only, so a single component can be traced without
    switching the whole process to DEBUG.
    """
    logger.remove()

    handler_ids: list[int] = [
        logger.add(
            sys.stderr,
            level=level,
            format=DEFAULT_LOG_FORMAT,
            colorize=colorize,
        )
    ]

    scopes = tuple(scope.strip() for scope in debug_scopes if scope.strip())
    if scopes and level.upper() != "DEBUG":

        def _debug_filter(record: object) -> bool:
            if not isinstance(record, Mapping):
                return False
            if getattr(record.get("level"), "name", None) != "DEBUG":
                return False
            record_name = record.get("name") or ""
            return any(_scope_matches(record_name, scope) for scope in scopes)

        handler_ids.append(
            logger.add(
                sys.stderr,
                level="DEBUG",
                format=DEFAULT_LOG_FORMAT,
                colorize=colorize,
                filter=_debug_filter,
            )
        )

    return tuple(handler_ids)
