"""
Text front-end: turn strings such as ``"2x + 3y <= 10"`` into expressions.

Grammar (whitespace is ignored)::

    constraint := terms ("<=" | ">=" | "=") number
    objective  := ["Z" "="] terms [("+" | "-") number]
    terms      := term (("+" | "-") term)*
    term       := [number ["*"]] label

A term without a coefficient (``x``, ``-y``) has coefficient ``1`` with the
sign applied. Labels start with a letter or underscore.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .core import OBJECTIVE_LABEL, Expression, Relation, Term, constraint, objective
from .errors import MalformedProblemError

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_TERM_RE = re.compile(rf"([+-]?)({_NUMBER})?\*?([A-Za-z_]\w*)")
_CONSTANT_RE = re.compile(rf"([+-]?)({_NUMBER})")
_CONSTRAINT_RE = re.compile(r"^([^<>=]+)(<=|>=|=)([^<>=]+)$")
_OBJECTIVE_PREFIX_RE = re.compile(rf"^{OBJECTIVE_LABEL}=", re.IGNORECASE)


def _strip(text: str) -> str:
    return re.sub(r"\s+", "", text)


def _parse_number(text: str, source: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise MalformedProblemError(f"Invalid number {text!r} in {source!r}") from None


def _parse_terms(text: str, source: str, allow_constant: bool) -> Tuple[List[Term], float]:
    terms: List[Term] = []
    constant = 0.0
    position = 0
    while position < len(text):
        if position > 0 and text[position] not in "+-":
            raise MalformedProblemError(f"Expected '+' or '-' at position {position} in {source!r}")
        match = _TERM_RE.match(text, position)
        if match is not None:
            sign, coefficient, label = match.groups()
            value = _parse_number(coefficient, source) if coefficient else 1.0
            terms.append(Term(-value if sign == "-" else value, label))
            position = match.end()
            continue
        match = _CONSTANT_RE.match(text, position) if allow_constant else None
        if match is not None:
            sign, number = match.groups()
            value = _parse_number(number, source)
            constant += -value if sign == "-" else value
            position = match.end()
            continue
        raise MalformedProblemError(f"Unexpected input at position {position} in {source!r}")
    if not terms:
        raise MalformedProblemError(f"No variable terms found in {source!r}")
    return terms, constant


def parse_constraint(text: str) -> Expression:
    """
    Parse a constraint such as ``"2x + 3y <= 10"``.

    Raises:
        MalformedProblemError: If the text is not a valid constraint.
    """
    compact = _strip(text)
    match = _CONSTRAINT_RE.match(compact)
    if match is None:
        raise MalformedProblemError(f"Invalid constraint: {text!r}")
    left, symbol, right = match.groups()
    terms, _ = _parse_terms(left, text, allow_constant=False)
    return constraint(*terms, relation=Relation.from_symbol(symbol), rhs=_parse_number(right, text))


def parse_objective(text: str) -> Expression:
    """
    Parse an objective such as ``"Z = 7x + 8y + 10z"``.

    The ``Z =`` prefix is optional and a numeric constant may appear among
    the terms.

    Raises:
        MalformedProblemError: If the text is not a valid objective.
    """
    compact = _OBJECTIVE_PREFIX_RE.sub("", _strip(text), count=1)
    if not compact or any(symbol in compact for symbol in "<>="):
        raise MalformedProblemError(f"Invalid objective: {text!r}")
    terms, constant = _parse_terms(compact, text, allow_constant=True)
    return objective(*terms, constant=constant)


def try_parse_constraint(text: str) -> Optional[Expression]:
    """Like :func:`parse_constraint` but returns ``None`` on malformed input."""
    try:
        return parse_constraint(text)
    except MalformedProblemError:
        return None


__all__ = ["parse_constraint", "parse_objective", "try_parse_constraint"]
