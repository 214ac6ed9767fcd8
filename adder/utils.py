# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, TypeVar

import pythonjsonlogger.json
from rich.logging import RichHandler

from adder.config import GLOBAL_ENV_PREFIX, get_env_config

T = TypeVar("T")

_HANDLER_MARK = "_adder_handler"


def is_coroutine(function: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(function)


def ensure_async(function: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    if is_coroutine(function):
        return function  # type: ignore

    @functools.wraps(function)
    async def async_wrapper(*args, **kwargs) -> T:
        return function(*args, **kwargs)

    if not callable(function):
        raise TypeError(f"{function} is not callable")

    return async_wrapper


def levenshtein_distance(source: str, target: str, ignore_case: bool = False) -> int:
    """Return the edit distance between `source` and `target`."""
    if ignore_case:
        source = source.lower()
        target = target.lower()
    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            cost = 0 if source_char == target_char else 1
            current.append(
                min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
            )
        previous = current
    return previous[-1]


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Invalid log level: {level}")
    return resolved


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int | str | None = None,
    program: str = "",
) -> None:
    """
    Configure logging for a program built on Adder, with support for both
    CLI-friendly and structured JSON output.

    The library itself only ever logs through the "adder" logger and never
    installs handlers; call this from your program's entry point. Calling it
    again replaces the handlers it installed earlier and leaves any others on
    the root logger alone.

    Args:
        mode (str | None):
            Logging output mode. Can be:
                - "cli": human-readable Rich console logs (default)
                - "json": machine-readable JSON logs
            If not provided, `<PROGRAM>_LOG_MODE` and then `ADDER_LOG_MODE` are used.
        log_filename (str | None):
            Path to the log file. Defaults to "<program>.log", or "adder.log".
        json_log_to_file (bool):
            Whether to format file logs as JSON instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int | str | None):
            Logging level for console output. If not provided,
            `<PROGRAM>_LOG_LEVEL` and then `ADDER_LOG_LEVEL` are used,
            otherwise `WARNING`.
        program (str):
            Name of the program, usually the root command's name. It selects
            the environment variables consulted above.

    Raises:
        ValueError: If an invalid logging `mode` or level is passed.
    """
    env_program = program or GLOBAL_ENV_PREFIX
    mode = mode or get_env_config(env_program, "LOG_MODE") or "cli"
    if console_log_level is None:
        console_log_level = get_env_config(env_program, "LOG_LEVEL") or logging.WARNING
    console_level = _resolve_level(console_log_level)

    if mode == "cli":
        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=True,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")
    console_handler.setLevel(console_level)

    file_handler = logging.FileHandler(log_filename or f"{program or 'adder'}.log", "a", "UTF-8")
    file_handler.setLevel(file_log_level)
    if json_log_to_file:
        file_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()
    for handler in (console_handler, file_handler):
        setattr(handler, _HANDLER_MARK, True)
        root.addHandler(handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger("adder")
    logger.propagate = True
    logger.debug("Logging initialized for '%s' in '%s' mode.", env_program, mode)
