"""Validation Rules - ordered per-field predicate chains for request input.

Invariants:
    - Every predicate is PURE: takes the raw field value, returns bool, never raises
    - Absent fields are evaluated as None (predicates decide what absence means)
    - Each failing Check produces exactly one FieldError; passing checks produce none
    - Chains never short-circuit: all checks of a field run, in declaration order
    - Coercion helpers are only called on values that passed the matching predicate
    - Numeric predicates accept only values that convert to a finite float

Design Decisions:
    - Rules are data (FieldRules tuples), not decorators: a route's rule set is a
      plain constant that tests can evaluate without an HTTP stack
    - Numeric/boolean predicates accept the string forms a form or query encoder
      would send ("300", "true") as well as native JSON types
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Literal


Location = Literal["params", "body"]

_INT_RE = re.compile(r"^[-+]?[0-9]+$")
_NUMERIC_RE = re.compile(r"^[-+]?([0-9]*\.)?[0-9]+$")
_TRUE_STRINGS = ("true", "1")
_FALSE_STRINGS = ("false", "0")

_MISSING = object()

NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class FieldError:
    """A single failed check, in the shape returned to clients."""
    msg: str
    param: str
    location: Location
    value: Any = _MISSING

    def to_dict(self) -> dict:
        error = {"type": "field"}
        if self.value is not _MISSING:
            error["value"] = self.value
        error.update(msg=self.msg, param=self.param, location=self.location)
        return error


@dataclass(frozen=True)
class Check:
    predicate: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class FieldRules:
    """Ordered checks bound to one request field, plus its coercion."""
    location: Location
    name: str
    checks: tuple[Check, ...]
    coerce: Callable[[Any], Any] | None = None


# ─── Predicates ──────────────────────────────────────────────────

def is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if not (isinstance(value, str) and _INT_RE.match(value)):
        return False
    try:
        int(value)
    except ValueError:
        # beyond the interpreter's int string-conversion limit
        return False
    return True


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def not_empty(value: Any) -> bool:
    return value is not None and value != ""


def has_max_length(limit: int) -> Callable[[Any], bool]:
    """Non-strings pass; is_string reports them."""
    def predicate(value: Any) -> bool:
        return not isinstance(value, str) or len(value) <= limit
    return predicate


def _finite_float(value: Any) -> float | None:
    try:
        number = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, str) and not _NUMERIC_RE.match(value):
        return False
    if not isinstance(value, (int, float, str)):
        return False
    return _finite_float(value) is not None


def is_positive(value: Any) -> bool:
    number = _finite_float(value) if is_numeric(value) else None
    return number is not None and number > 0


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return value in (0, 1)
    return isinstance(value, str) and value in _TRUE_STRINGS + _FALSE_STRINGS


# ─── Coercion ────────────────────────────────────────────────────

def to_int(value: Any) -> int:
    return int(value)


def to_float(value: Any) -> float:
    return float(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value in _TRUE_STRINGS
    return bool(value)


# ─── Evaluation ──────────────────────────────────────────────────

def evaluate(rules: FieldRules, source: dict) -> list[FieldError]:
    """Run every check of one field chain. Pure - returns failures in order."""
    present = rules.name in source
    value = source.get(rules.name)
    return [
        FieldError(
            msg=check.message,
            param=rules.name,
            location=rules.location,
            value=value if present else _MISSING,
        )
        for check in rules.checks
        if not check.predicate(value)
    ]


def collect_errors(
    chains: tuple[FieldRules, ...], params: dict, body: dict,
) -> list[FieldError]:
    """Evaluate all chains of a route in declaration order."""
    errors: list[FieldError] = []
    for rules in chains:
        source = params if rules.location == "params" else body
        errors.extend(evaluate(rules, source))
    return errors


def coerce_fields(
    chains: tuple[FieldRules, ...], params: dict, body: dict,
) -> tuple[dict, dict]:
    """Copies of params/body with every present ruled field converted.

    Only meaningful after collect_errors() returned nothing.
    """
    params, body = dict(params), dict(body)
    for rules in chains:
        source = params if rules.location == "params" else body
        if rules.coerce is not None and rules.name in source:
            source[rules.name] = rules.coerce(source[rules.name])
    return params, body


# ─── Route Rule Sets ─────────────────────────────────────────────

INVALID_VALUE = "Invalid value"

PRODUCT_ID_RULES: tuple[FieldRules, ...] = (
    FieldRules("params", "id", (Check(is_int, INVALID_VALUE),), coerce=to_int),
)

PRODUCT_BODY_RULES: tuple[FieldRules, ...] = (
    FieldRules("body", "name", (
        Check(is_string, "Product name must be text"),
        Check(not_empty, "Product name is required"),
        Check(
            has_max_length(NAME_MAX_LENGTH),
            f"Product name must be at most {NAME_MAX_LENGTH} characters",
        ),
    )),
    FieldRules("body", "price", (
        Check(is_numeric, INVALID_VALUE),
        Check(not_empty, "Product price is required"),
        Check(is_positive, INVALID_VALUE),
    ), coerce=to_float),
)

PRODUCT_CREATE_RULES = PRODUCT_BODY_RULES

PRODUCT_UPDATE_RULES: tuple[FieldRules, ...] = (
    *PRODUCT_ID_RULES,
    *PRODUCT_BODY_RULES,
    FieldRules("body", "availability", (
        Check(is_boolean, "Invalid availability value"),
    ), coerce=to_bool),
)
