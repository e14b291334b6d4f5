"""Generating configuration files from profile templates.

A template may contain these directives, where EXPR is a feature
expression such as ``"with-sudo" and not "with-faillock"``::

    {continue if EXPR}
    {stop if EXPR}
    {include if EXPR}
    {exclude if EXPR}
    {if EXPR:value-if-true}
    {if EXPR:value-if-true|value-if-false}
    {imply "feature" if EXPR}
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import os
import re
from typing import Iterable

from authselect.evaluator import EvaluationError, evaluate
from authselect.fileutil import mktmp_for
from authselect.strarray import add_value, copy_values
from authselect.textfile import write_text
from authselect.textutil import ExplodeFlags, explode, implode

log = logging.getLogger(__name__)

__all__ = [
    "TemplateError",
    "PREAMBLE",
    "generate",
    "list_features",
    "list_features_from_expression",
    "write",
    "write_temporary",
    "validate_written_content",
]

# Character classes never cross a line boundary.
_RE_VALUE = r"([^{}|\n]*)"
_RE_FEATURE = r'"([^{}"|\n]+)"'
_RE_EXPRESSION = r"([^{}|:\n]+)"
_OP_RE_LINE = r"(continue if|stop if|include if|exclude if) " + _RE_EXPRESSION
_OP_RE_IMPLY = r"(imply) " + _RE_FEATURE + r" if " + _RE_EXPRESSION
_OP_RE_IF = r"(if) " + _RE_EXPRESSION + r":" + _RE_VALUE + r"(\|" + _RE_VALUE + r")?"
_OP_RE = re.compile(
    r"\{(" + _OP_RE_LINE + r"|" + _OP_RE_IF + r"|" + _OP_RE_IMPLY + r")\}"
)
_FEATURE_RE = re.compile(r'[^"\n]*' + _RE_FEATURE)

PREAMBLE = (
    "# Generated by authselect\n"
    "# Do not modify this file manually, use authselect instead. "
    "Any user changes will be overwritten.\n"
    "# You can stop authselect from managing your configuration by calling "
    "'authselect opt-out'.\n"
    "# See authselect(8) for more details.\n\n"
)


class TemplateError(ValueError):
    """Raised when a template cannot be processed."""


class _Operator(enum.Enum):
    CONTINUE = "continue if"
    STOP = "stop if"
    INCLUDE = "include if"
    EXCLUDE = "exclude if"
    IMPLY = "imply"
    IF = "if"


@dataclasses.dataclass
class _Directive:
    op: _Operator
    expression: str
    if_true: str | None = None
    if_false: str | None = None
    value: str | None = None


def _group(match: re.Match, index: int) -> str:
    text = match.group(index)
    return "" if text is None else text


def _parse_match(match: re.Match) -> _Directive:
    inner = match.group(1)
    # Order matters: "if" is a prefix of nothing else but must come last.
    op = next((op for op in _Operator if inner.startswith(op.value)), None)
    if op is None:
        log.error("Invalid operator!")
        raise TemplateError(f"Invalid operator in [{match.group(0)}]")

    if op is _Operator.IMPLY:
        return _Directive(op, _group(match, 11), value=_group(match, 10))
    if op is _Operator.IF:
        return _Directive(
            op,
            _group(match, 5),
            if_true=_group(match, 6),
            if_false=_group(match, 8),
        )
    return _Directive(op, _group(match, 3))


class _Buffer:
    """Template text in which characters are blanked out and later dropped."""

    def __init__(self, content: str) -> None:
        self.chars = list(content)

    def __len__(self) -> int:
        return len(self.chars)

    def removed(self, index: int) -> bool:
        return self.chars[index] == ""

    def intact_end(self, start: int) -> int:
        end = start
        while end < len(self.chars) and not self.removed(end):
            end += 1
        return end

    def remove_line(self, cursor: int, start: int) -> None:
        left = start
        while left != 0 and self.chars[left - 1] != "\n":
            left -= 1
        while left < len(self.chars) and (left < cursor or not self.removed(left)):
            is_newline = self.chars[left] == "\n"
            self.chars[left] = ""
            if is_newline:
                break
            left += 1

    def remove_range(self, start: int, end: int) -> None:
        for index in range(start, min(end, len(self.chars))):
            if self.removed(index):
                break
            self.chars[index] = ""

    def remove_remainder(self, start: int) -> None:
        for index in range(start, self.intact_end(start)):
            self.chars[index] = ""

    def replace(self, start: int, end: int, replacement: str) -> None:
        if len(replacement) > end - start:
            return
        self.chars[start : start + len(replacement)] = list(replacement)
        for index in range(start + len(replacement), end):
            self.chars[index] = ""

    def text(self) -> str:
        return "".join(self.chars)


def _apply(
    buffer: _Buffer,
    cursor: int,
    match: re.Match,
    directive: _Directive,
    features: list[str],
) -> None:
    try:
        enabled = evaluate(directive.expression, features)
    except EvaluationError as exc:
        raise TemplateError(
            f"Invalid expression [{directive.expression}]: {exc}"
        ) from exc

    start, end = match.start(), match.end()
    op = directive.op
    if op is _Operator.CONTINUE:
        if enabled:
            buffer.remove_line(cursor, start)
        else:
            buffer.remove_remainder(start)
    elif op is _Operator.STOP:
        if not enabled:
            buffer.remove_line(cursor, start)
        else:
            buffer.remove_remainder(start)
    elif op is _Operator.INCLUDE:
        if enabled:
            buffer.remove_range(start, end)
        else:
            buffer.remove_line(cursor, start)
    elif op is _Operator.EXCLUDE:
        if not enabled:
            buffer.remove_range(start, end)
        else:
            buffer.remove_line(cursor, start)
    elif op is _Operator.IMPLY:
        if enabled:
            add_value(features, directive.value, True)
        buffer.remove_line(cursor, start)
    else:
        replacement = directive.if_true if enabled else directive.if_false
        buffer.replace(start, end, replacement)


def _process_operators(content: str, features: Iterable[str]) -> str:
    features_copy = copy_values(features, True)
    if features_copy is None:
        raise TemplateError("Features must not be None")

    buffer = _Buffer(content)
    orig_len = len(buffer)
    cursor = 0
    while True:
        match = _OP_RE.search(content, cursor, buffer.intact_end(cursor))
        if match is None:
            break

        directive = _parse_match(match)
        _apply(buffer, cursor, match, directive, features_copy)

        # The whole line may have been removed; skip to the next kept character.
        cursor = match.end()
        while cursor < orig_len and buffer.removed(cursor):
            cursor += 1

    return buffer.text()


def generate(template: str | None, features: Iterable[str]) -> str:
    """Generate output from ``template`` with the given enabled ``features``.

    Raises TemplateError if the template cannot be processed.
    """
    if template is None:
        return ""

    try:
        output = _process_operators(template, features)
    except TemplateError as exc:
        log.error("Unable to generate template: %s", exc)
        raise

    lines = explode(output, "\n", ExplodeFlags.TRIM_RIGHT)
    return implode(lines, "\n")


def list_features_from_expression(expression: str) -> list[str]:
    """Return the feature names quoted in ``expression``, without duplicates."""
    features: list[str] = []
    position = 0
    while True:
        match = _FEATURE_RE.search(expression, position)
        if match is None:
            break
        add_value(features, match.group(1), True)
        position = match.end()
    return features


def list_features(template: str | None) -> list[str]:
    """Return all features used in the directives of ``template``."""
    features: list[str] = []
    if template is None:
        return features

    for match in _OP_RE.finditer(template):
        directive = _parse_match(match)
        for feature in list_features_from_expression(directive.expression):
            add_value(features, feature, True)
    return features


def write(path: str | os.PathLike, content: str | None, mode: int) -> None:
    """Write the generated-file preamble followed by ``content`` to ``path``."""
    output = PREAMBLE if content is None else PREAMBLE + content
    write_text(path, output, mode)


def write_temporary(
    path: str | os.PathLike, content: str | None, mode: int
) -> str:
    """Write preamble and ``content`` to a new temporary file next to ``path``.

    Returns the path of the temporary file.
    """
    try:
        tmpfile = mktmp_for(path, mode)
    except OSError as exc:
        log.error("Unable to create temporary file for [%s]: %s", path, exc)
        raise
    write(tmpfile, content, mode)
    return tmpfile


def validate_written_content(file_content: str, expected: str) -> bool:
    """Return True if ``file_content`` matches ``expected``.

    Comments, empty lines and surrounding whitespace are ignored since they
    do not affect the resulting configuration.
    """
    processed_content = implode(explode(file_content, "\n", ExplodeFlags.ALL), "\n")
    processed_expected = implode(explode(expected, "\n", ExplodeFlags.ALL), "\n")
    return processed_content == processed_expected