"""
Class filter parsing for JaCoCo coverage.

Build tasks describe coverage filters in package notation, e.g.
``+com.acme.*,-com.acme.generated.*,-com.acme.Main``. Gradle's JaCoCo report
wants Ant-style path patterns over compiled class files instead.
"""

import logging
from dataclasses import dataclass

from pipeline_adapters.constants import Messages
from pipeline_adapters.utils.files import is_null_or_whitespace

logger = logging.getLogger(__name__)

FILTER_SEPARATOR = ":"


class InvalidClassFilterError(ValueError):
    """Raised when a class filter entry is not of the form ``+pattern`` or ``-pattern``."""


@dataclass
class ClassFilters:
    """Include/exclude patterns, each a ``:``-separated list in package notation."""

    include_filter: str = ""
    exclude_filter: str = ""


def extract_filters(class_filter: str | None) -> ClassFilters:
    """
    Split a comma-separated class filter into include and exclude parts.

    Args:
        class_filter: e.g. ``"+com.acme.*,-com.acme.Main"``; blank means no filtering

    Returns:
        ClassFilters with ``:``-joined patterns

    Raises:
        InvalidClassFilterError: If an entry is too short or lacks a ``+``/``-`` sign
    """
    includes: list[str] = []
    excludes: list[str] = []

    if is_null_or_whitespace(class_filter):
        return ClassFilters()

    for entry in class_filter.split(","):
        entry = entry.strip()
        if len(entry) < 2:
            raise InvalidClassFilterError(Messages.INVALID_CLASS_FILTER.format(entry))
        sign, pattern = entry[0], entry[1:]
        if sign == "+":
            includes.append(pattern)
        elif sign == "-":
            excludes.append(pattern)
        else:
            raise InvalidClassFilterError(Messages.INVALID_CLASS_FILTER.format(entry))

    return ClassFilters(
        include_filter=FILTER_SEPARATOR.join(includes),
        exclude_filter=FILTER_SEPARATOR.join(excludes),
    )


def apply_filter_pattern(filter_expr: str | None) -> list[str]:
    """
    Convert ``:``-separated package patterns into quoted Ant path patterns.

    ``com.acme.*`` becomes ``'com/acme/**'``, ``com.acme.Bar*`` becomes
    ``'com/acme/Bar*/**'`` and ``com.acme.Main`` becomes ``'com/acme/Main.class'``.
    """
    patterns: list[str] = []

    if not is_null_or_whitespace(filter_expr):
        for token in filter_expr.strip().replace(".", "/").split(FILTER_SEPARATOR):
            token = token.strip()
            if not token:
                continue
            if token.endswith("/*"):
                patterns.append(f"'{token[:-2]}/**'")
            elif token.endswith("*"):
                patterns.append(f"'{token}/**'")
            else:
                patterns.append(f"'{token}.class'")

    logger.debug(f"Applying the filter pattern: {filter_expr} op: {patterns}")
    return patterns
