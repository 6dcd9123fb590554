"""
Operation dispatcher.

Binds each named operation to its input schema, output schema, target loader
and handler, and runs every call through the same sequence:

1. unknown name -> NOT_FOUND; anonymous caller on a non-public rule -> UNAUTHORIZED
2. rules that need no record (authenticated / admin) are evaluated first
3. input is validated -> BAD_REQUEST, before any store access
4. the target record (and its owning association) is loaded -> NOT_FOUND
5. the access rule is evaluated against that subject -> FORBIDDEN
6. the handler performs the repository call; the result is serialized
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from starlette.responses import Response

from buddy_core.api.permissions import (
    PROFILE_RULES,
    Caller,
    Decision,
    Rule,
    Subject,
    decide,
    rule_for,
)
from buddy_core.db import models
from buddy_core.db.repositories import buddies as buddy_repo
from buddy_core.db.repositories import new_hires as new_hire_repo
from buddy_core.errors import Forbidden, NotFound, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

QUERY = "query"
MUTATION = "mutation"

# Rules decidable from the caller alone
_CALLER_ONLY_RULES = frozenset({Rule.PUBLIC, Rule.AUTHENTICATED, Rule.ADMIN})


@dataclass
class CallContext:
    db: Session
    caller: Optional[Caller] = None
    user: Optional[models.User] = None
    response: Optional[Response] = None
    profiles_resolved: bool = False


@dataclass
class Target:
    record: Any = None
    subject: Subject = field(default_factory=Subject)


Loader = Callable[[CallContext, Any], Target]
Handler = Callable[[CallContext, Any, Target], Any]


@dataclass(frozen=True)
class Operation:
    name: str
    kind: str
    rule: Rule
    handler: Handler
    input_model: Optional[Type[BaseModel]] = None
    output_model: Optional[Type[BaseModel]] = None
    many: bool = False
    load: Optional[Loader] = None
    # Needs caller profile ids even though the rule does not (scoped listings)
    scoped: bool = False

    @property
    def needs_profiles(self) -> bool:
        return self.scoped or self.rule in PROFILE_RULES


def resolve_profiles(ctx: CallContext) -> Optional[Caller]:
    """Attach the caller's buddy / new hire profile ids (looked up by user id)."""
    if ctx.caller is None or ctx.profiles_resolved:
        return ctx.caller
    buddy = buddy_repo.get_buddy_by_user_id(ctx.db, ctx.caller.id)
    new_hire = new_hire_repo.get_new_hire_by_user_id(ctx.db, ctx.caller.id)
    ctx.caller = ctx.caller.with_profiles(
        getattr(buddy, "id", None),
        getattr(new_hire, "id", None),
    )
    ctx.profiles_resolved = True
    return ctx.caller


def _format_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = err.get("msg", "invalid")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid input"


class OperationRegistry:
    """Closed catalog of named operations."""

    def __init__(self):
        self._operations: Dict[str, Operation] = {}

    def register(
        self,
        name: str,
        *,
        kind: str,
        input_model: Optional[Type[BaseModel]] = None,
        output: Optional[Type[BaseModel]] = None,
        many: bool = False,
        load: Optional[Loader] = None,
        scoped: bool = False,
    ):
        if name in self._operations:
            raise ValueError(f"Operation '{name}' is already registered")
        rule = rule_for(name)

        def decorator(fn: Handler) -> Handler:
            self._operations[name] = Operation(
                name=name,
                kind=kind,
                rule=rule,
                handler=fn,
                input_model=input_model,
                output_model=output,
                many=many,
                load=load,
                scoped=scoped,
            )
            return fn

        return decorator

    def query(self, name: str, **kwargs):
        return self.register(name, kind=QUERY, **kwargs)

    def mutation(self, name: str, **kwargs):
        return self.register(name, kind=MUTATION, **kwargs)

    def get(self, name: str) -> Operation:
        op = self._operations.get(name)
        if op is None:
            raise NotFound(f"No operation named '{name}'")
        return op

    def names(self) -> List[str]:
        return sorted(self._operations)

    def __contains__(self, name: str) -> bool:
        return name in self._operations

    def parse_input(self, op: Operation, raw_input: Any):
        if op.input_model is None:
            if raw_input not in (None, {}):
                raise ValidationError(f"{op.name} takes no input")
            return None
        if raw_input is None:
            raw_input = {}
        if not isinstance(raw_input, dict):
            raise ValidationError("Input must be a JSON object")
        try:
            return op.input_model.model_validate(raw_input)
        except PydanticValidationError as exc:
            raise ValidationError(_format_validation_error(exc)) from exc

    def _enforce(self, op: Operation, ctx: CallContext, subject: Optional[Subject]) -> None:
        if decide(op.rule, ctx.caller, subject) != Decision.ALLOW:
            logger.info(
                "policy_denied: operation=%s caller_id=%s role=%s",
                op.name,
                getattr(ctx.caller, "id", None),
                getattr(ctx.caller, "role", None),
            )
            raise Forbidden()

    def serialize(self, op: Operation, result: Any) -> Any:
        if result is None:
            return None
        if op.many:
            model = op.output_model
            return [model.model_validate(item).model_dump(by_alias=True, mode="json") for item in result]
        if isinstance(result, BaseModel):
            return result.model_dump(by_alias=True, mode="json")
        if op.output_model is not None:
            return op.output_model.model_validate(result).model_dump(by_alias=True, mode="json")
        return result

    def call(self, name: str, ctx: CallContext, raw_input: Any = None) -> Any:
        """Run an operation and return its unserialized result."""
        op = self.get(name)
        if op.rule != Rule.PUBLIC and ctx.caller is None:
            raise Unauthorized()
        if op.rule in _CALLER_ONLY_RULES:
            self._enforce(op, ctx, None)

        payload = self.parse_input(op, raw_input)

        target = op.load(ctx, payload) if op.load is not None else Target()
        if op.needs_profiles:
            resolve_profiles(ctx)
        if op.rule not in _CALLER_ONLY_RULES:
            self._enforce(op, ctx, target.subject)

        return op.handler(ctx, payload, target)

    def dispatch(self, name: str, ctx: CallContext, raw_input: Any = None) -> Any:
        """Run an operation and return its JSON-ready result."""
        result = self.call(name, ctx, raw_input)
        return self.serialize(self.get(name), result)


registry = OperationRegistry()


def result_envelope(data: Any) -> Dict[str, Any]:
    return {"result": {"data": data}}
