# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile percent-directive error formats into regular expressions.

A format is literal regular-expression text interspersed with directives:

========  ==========================================  =============
Directive Meaning                                     Group
========  ==========================================  =============
``%p``    program name (no colon or control chars)    ``p``
``%f``    file name (no colon or control chars)       ``f``
``%l``    line number                                 ``l``
``%c``    column number                               ``c``
``%m``    message, rest of the line                   ``m``
``%%``    literal ``%``
========  ==========================================  =============

Compilation is two-stage: :func:`format_to_pattern` produces the pattern
text, :func:`compile_format` compiles it in multi-line mode so ``^`` and ``$``
anchor at each line of tool output.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from re import Pattern
from typing import Final

from ..config import ConfigError

LOGGER = logging.getLogger(__name__)

_FIELD: Final[str] = r"[^:\x00-\x1f\x7f]+"

DIRECTIVES: Final[Mapping[str, str]] = {
    "p": rf"(?P<p>{_FIELD})",
    "f": rf"(?P<f>{_FIELD})",
    "l": r"(?P<l>\d+)",
    "c": r"(?P<c>\d+)",
    "m": r"(?P<m>.*)",
    "%": "%",
}


def format_to_pattern(fmt: str) -> str:
    """Translate ``fmt`` into regular-expression text.

    Unknown directives are dropped with a warning rather than rejected, so a
    format written for a newer release still loads.

    Args:
        fmt: Percent-directive format string.

    Returns:
        str: Pattern text with named groups for each directive.
    """

    parts: list[str] = []
    escape = False
    for char in fmt:
        if escape:
            replacement = DIRECTIVES.get(char)
            if replacement is None:
                LOGGER.warning("invalid format %%%s in %r", char, fmt)
            else:
                parts.append(replacement)
            escape = False
        elif char == "%":
            escape = True
        else:
            parts.append(char)
    if escape:
        LOGGER.warning("dangling %% at end of format %r", fmt)
    return "".join(parts)


def compile_format(fmt: str) -> Pattern[str]:
    """Compile ``fmt`` into a multi-line regular expression.

    Args:
        fmt: Percent-directive format string.

    Returns:
        Pattern[str]: Compiled expression.

    Raises:
        ConfigError: If the resulting pattern is not a valid regular expression,
            for example when a directive letter is repeated.
    """

    pattern = format_to_pattern(fmt)
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as exc:
        raise ConfigError(f"invalid format {fmt!r}: {exc}") from exc


__all__ = ["DIRECTIVES", "compile_format", "format_to_pattern"]
