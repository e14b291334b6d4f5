"""Evaluation of boolean feature expressions such as ``"a" and not "b"``."""

from __future__ import annotations

import enum
import string
from typing import Iterable

__all__ = ["EvaluationError", "Tokenizer", "evaluate"]

_BLANK = " \t"
_LETTERS = string.ascii_letters


class EvaluationError(ValueError):
    """Raised when an expression cannot be tokenized or evaluated."""


class _State(enum.Enum):
    INVALID = 0
    BEGIN = 1
    STRING = 2
    SUBEXPRESSION = 3
    OPERATOR = 4
    UNARY_NOT = 5
    END = 6


class _Operator(enum.Enum):
    INVALID = 0
    AND = 1
    OR = 2
    NOT = 3


_OPERATORS = {
    "and": _Operator.AND,
    "or": _Operator.OR,
    "not": _Operator.NOT,
}


class Tokenizer:
    """Split an expression into tokens one at a time.

    Tokens are ``(``, ``)``, runs of letters (operators) and quoted feature
    names, which keep their quotation marks. An empty token marks the end.
    """

    def __init__(self, expression: str) -> None:
        if expression is None:
            raise EvaluationError("Expression must not be None")
        self.expression = expression
        self.cursor = 0
        self.token = ""

    def next_token(self) -> str:
        """Read the next token, store it in ``token`` and return it."""
        text = self.expression
        while self.cursor < len(text) and text[self.cursor] in _BLANK:
            self.cursor += 1

        self.token = ""
        if self.cursor >= len(text):
            return self.token

        char = text[self.cursor]
        if char in "()":
            self.token = char
            self.cursor += 1
        elif char == '"':
            closing = text.find('"', self.cursor + 1)
            if closing == -1:
                self.cursor = len(text)
                raise EvaluationError(
                    f"Unterminated string in expression [{text}]"
                )
            self.token = text[self.cursor : closing + 1]
            self.cursor = closing + 1
        else:
            end = self.cursor
            while end < len(text) and text[end] in _LETTERS:
                end += 1
            self.token = text[self.cursor : end]
            self.cursor = end
        return self.token


def _operator(token: str | None) -> _Operator:
    if token is None:
        return _Operator.INVALID
    return _OPERATORS.get(token.lower(), _Operator.INVALID)


def _token_to_state(token: str) -> _State:
    first = token[0]
    if first == '"':
        return _State.STRING
    if first == "(":
        return _State.SUBEXPRESSION
    if first == ")":
        return _State.END
    operator = _operator(token)
    if operator is _Operator.NOT:
        return _State.UNARY_NOT
    if operator is not _Operator.INVALID:
        return _State.OPERATOR
    return _State.INVALID


class _Machine:
    def __init__(self, tokenizer: Tokenizer, features: frozenset[str]) -> None:
        self.tokenizer = tokenizer
        self.features = features

    def _feature(self, token: str) -> bool:
        return token[1:-1] in self.features

    @staticmethod
    def _combine(
        operator: _Operator, result: bool, negation: bool, value: bool
    ) -> bool:
        value = not value if negation else value
        if operator is _Operator.AND:
            return result and value
        if operator is _Operator.OR:
            return result or value
        if operator is _Operator.INVALID:
            return value
        raise EvaluationError("Invalid operator")

    def run(self, depth: int) -> bool:
        state = _State.BEGIN
        result = False
        negation = False
        operator = _Operator.INVALID

        while True:
            token = self.tokenizer.next_token()
            if token == "":
                break

            nextstate = _token_to_state(token)

            if state is _State.BEGIN:
                if nextstate is _State.STRING:
                    result = self._feature(token)
                elif nextstate is _State.UNARY_NOT:
                    negation = not negation
                elif nextstate is _State.SUBEXPRESSION:
                    sub = self.run(depth + 1)
                    result = self._combine(operator, result, negation, sub)
                    negation = False
                else:
                    raise EvaluationError(f"Unexpected token [{token}]")
            elif state in (_State.UNARY_NOT, _State.OPERATOR):
                if nextstate is _State.STRING:
                    sub = self._feature(token)
                    result = self._combine(operator, result, negation, sub)
                    negation = False
                elif nextstate is _State.UNARY_NOT:
                    negation = not negation
                elif nextstate is _State.SUBEXPRESSION:
                    sub = self.run(depth + 1)
                    result = self._combine(operator, result, negation, sub)
                    negation = False
                elif nextstate is _State.END:
                    if depth == 0:
                        raise EvaluationError("Too many closing parentheses")
                else:
                    raise EvaluationError(f"Unexpected token [{token}]")
            elif state in (_State.SUBEXPRESSION, _State.STRING):
                if nextstate is _State.OPERATOR:
                    operator = _operator(token)
                elif nextstate is _State.END:
                    if depth == 0:
                        raise EvaluationError("Too many closing parentheses")
                    return result
                else:
                    raise EvaluationError(f"Unexpected token [{token}]")
            elif state is _State.END:
                if depth == 0:
                    raise EvaluationError("Too many closing parentheses")
            else:
                raise EvaluationError(f"Unexpected token [{token}]")

            state = nextstate

        if depth != 0:
            raise EvaluationError("Unbalanced parentheses")

        if state in (_State.OPERATOR, _State.UNARY_NOT, _State.BEGIN):
            raise EvaluationError("Expression ends unexpectedly")

        return result


def evaluate(expression: str, features: Iterable[str]) -> bool:
    """Evaluate ``expression`` with the given enabled ``features``.

    Raises EvaluationError if the expression is malformed.
    """
    if expression is None or features is None:
        raise EvaluationError("Expression and features must not be None")
    machine = _Machine(Tokenizer(expression), frozenset(features))
    return machine.run(0)