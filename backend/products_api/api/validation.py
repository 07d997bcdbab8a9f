"""Validation Middleware - the single choke point for malformed request input.

Invariants:
    - Runs the route's rule chains against path params and the JSON body
    - Any failure raises InputValidationError (rendered as 400 {"errors": [...]})
      and the route handler is never invoked
    - No failures: returns params/body with ruled fields coerced (id → int,
      price → float, availability → bool), no side effects
    - Body parsed only when a chain targets the body

Design Decisions:
    - FastAPI dependency over Starlette middleware: dependencies run per route,
      before the handler's own dependencies (no DB session opened for bad input)
    - Non-object JSON bodies evaluated as {}: every required body field then fails
      with its own field-level error instead of a single opaque one
"""

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from fastapi import Request

from products_api.core.errors import InputValidationError
from products_api.core.validation_rules import (
    FieldError, FieldRules, coerce_fields, collect_errors,
)


@dataclass
class ValidatedRequest:
    params: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object. Empty body → {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise InputValidationError([
            FieldError("Malformed JSON body", "", "body").to_dict(),
        ])
    return payload if isinstance(payload, dict) else {}


def validate_request(
    *rule_sets: tuple[FieldRules, ...],
) -> Callable[[Request], Awaitable[ValidatedRequest]]:
    """Build the dependency that enforces the given rule chains."""
    chains = tuple(rules for rule_set in rule_sets for rules in rule_set)
    needs_body = any(rules.location == "body" for rules in chains)

    async def handle_input_errors(request: Request) -> ValidatedRequest:
        params = dict(request.path_params)
        body = await read_json_body(request) if needs_body else {}
        errors = collect_errors(chains, params, body)
        if errors:
            raise InputValidationError([e.to_dict() for e in errors])
        params, body = coerce_fields(chains, params, body)
        return ValidatedRequest(params=params, body=body)

    return handle_input_errors
