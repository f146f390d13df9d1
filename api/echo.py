from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Request

router = APIRouter(prefix="/api/echo", tags=["echo"])


@router.get("")
async def echo_query(request: Request):
    """Return query params as the handler received them (snake_case)."""
    params: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        if key in params:
            existing = params[key]
            params[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return {"params": params, "received_at": datetime.now(timezone.utc)}


@router.post("")
async def echo_body(payload: Any = Body(...)):
    """Return the JSON body as the handler received it; serialized back in camelCase."""
    return {"params": payload, "received_at": datetime.now(timezone.utc)}
