"""
JSON encoding with camelCase keys.
Keys are converted first, then values are made JSON-compatible by FastAPI's jsonable_encoder,
so records and dates keep their own field names and formats.
"""
from __future__ import annotations

import json
from typing import Any, ClassVar, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from casebridge.case import Symbol, snake_to_camel
from casebridge.keys import convert_map_keys

_CUSTOM_ENCODERS = {Symbol: str}


def to_jsonable(data: Any) -> Any:
    """camelCase keys + JSON-compatible values, ready for any JSON serializer."""
    return jsonable_encoder(convert_map_keys(data, snake_to_camel), custom_encoder=_CUSTOM_ENCODERS)


def encode(data: Any, **options: Any) -> str:
    """Encode `data` as JSON text with camelCase keys. `options` go to json.dumps unchanged."""
    return json.dumps(to_jsonable(data), **options)


def encode_to_bytes(data: Any, **options: Any) -> bytes:
    """Same as encode(), returning UTF-8 bytes for streaming into a response body."""
    return encode(data, **options).encode("utf-8")


class CamelCaseJSONResponse(JSONResponse):
    """JSONResponse that renders dict keys in camelCase. Use as FastAPI default_response_class."""

    indent: ClassVar[Optional[int]] = None

    def render(self, content: Any) -> bytes:
        return encode_to_bytes(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=self.indent,
            separators=(",", ":") if self.indent is None else None,
        )


def camel_case_response_class(indent: Optional[int] = None) -> type[CamelCaseJSONResponse]:
    """Build a CamelCaseJSONResponse subclass with fixed pretty-printing options."""
    if indent is None:
        return CamelCaseJSONResponse
    return type("IndentedCamelCaseJSONResponse", (CamelCaseJSONResponse,), {"indent": indent})
