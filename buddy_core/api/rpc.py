"""
RPC transport for the operation catalog.

``GET /rpc/{operation}?input=<json>`` runs queries; ``POST /rpc/{operation}``
with a JSON body runs queries or mutations. Successful calls return
``{"result": {"data": ...}}``; failures are rendered by the ``ServiceError``
handler installed in ``main``.
"""
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from buddy_core.api.catalog import registry
from buddy_core.api.deps import CallerContext, get_caller_context
from buddy_core.api.dispatcher import QUERY, CallContext, result_envelope
from buddy_core.db.database import get_db
from buddy_core.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rpc", tags=["rpc"])


def _decode_query_input(raw: Optional[str]) -> Any:
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"input is not valid JSON: {exc.msg}") from exc


def _run(operation: str, raw_input: Any, db: Session, identity: CallerContext, response: Response):
    user, caller = identity
    ctx = CallContext(db=db, caller=caller, user=user, response=response)
    data = registry.dispatch(operation, ctx, raw_input)
    return result_envelope(data)


@router.get("/{operation}")
def run_query(
    operation: str,
    response: Response,
    input_: Optional[str] = Query(default=None, alias="input"),
    db: Session = Depends(get_db),
    identity: CallerContext = Depends(get_caller_context),
):
    op = registry.get(operation)
    if op.kind != QUERY:
        raise ValidationError(f"METHOD_NOT_SUPPORTED: '{operation}' is a mutation, use POST")
    return _run(operation, _decode_query_input(input_), db, identity, response)


@router.post("/{operation}")
def run_operation(
    operation: str,
    response: Response,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    identity: CallerContext = Depends(get_caller_context),
):
    return _run(operation, payload, db, identity, response)


@router.get("")
def list_operations():
    """Names of every operation in the catalog, grouped by kind."""
    grouped = {"queries": [], "mutations": []}
    for name in registry.names():
        op = registry.get(name)
        grouped["queries" if op.kind == QUERY else "mutations"].append(name)
    return result_envelope(grouped)
