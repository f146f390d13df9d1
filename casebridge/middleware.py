"""
ASGI middleware that converts incoming request parameter names from camelCase to snake_case.

Query string names, JSON bodies, urlencoded form bodies and multipart field names are rewritten
before the request reaches the router, so handlers and pydantic schemas only ever see snake_case keys.
Multipart part contents (file uploads included) are never touched, and bodies that do not decode
are forwarded as-is.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any
from urllib.parse import parse_qsl, urlencode

from python_multipart.multipart import parse_options_header
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from casebridge.case import camel_to_snake
from casebridge.keys import convert_map_keys

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
MULTIPART_CONTENT_TYPE = "multipart/form-data"

# `; name="..."` in a part's Content-Disposition; `; filename="..."` does not match
_PART_NAME = re.compile(rb'(;\s*name=")([^"]*)(")', re.IGNORECASE)


def convert_query_string(query_string: bytes) -> bytes:
    """Rename every query parameter to snake_case, keeping values, order and repeated names."""
    if not query_string:
        return query_string
    pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    return urlencode([(camel_to_snake(k), v) for k, v in pairs]).encode("latin-1")


def _content_type(headers: list[tuple[bytes, bytes]]) -> str:
    for name, value in headers:
        if name.lower() == b"content-type":
            return value.decode("latin-1")
    return ""


def _parse_content_type(content_type: str) -> tuple[str, dict[bytes, bytes]]:
    media_type, options = parse_options_header(content_type)
    return media_type.decode("latin-1").strip().lower(), options


def _is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def _is_convertible(media_type: str) -> bool:
    return _is_json(media_type) or media_type in (FORM_CONTENT_TYPE, MULTIPART_CONTENT_TYPE)


def _rename_part(part: bytes) -> bytes:
    head, sep, rest = part.partition(b"\r\n\r\n")
    if not sep:
        return part

    def rename(match: re.Match) -> bytes:
        name = camel_to_snake(match.group(2).decode("utf-8", "surrogateescape"))
        return match.group(1) + name.encode("utf-8", "surrogateescape") + match.group(3)

    return _PART_NAME.sub(rename, head, count=1) + sep + rest


def convert_multipart(body: bytes, boundary: bytes) -> bytes:
    """Rename multipart field names to snake_case; part headers other than the name and all part data are kept."""
    if not boundary:
        return body
    delimiter = b"--" + boundary
    pieces = body.split(delimiter)
    # pieces[0] is the preamble, the last piece holds the closing "--"
    renamed = [pieces[0]] + [_rename_part(p) for p in pieces[1:-1]] + pieces[-1:]
    return delimiter.join(renamed)


def convert_body(body: bytes, content_type: str) -> bytes:
    """Return the body with parameter names in snake_case; unknown or invalid bodies are returned as-is."""
    if not body:
        return body
    media_type, options = _parse_content_type(content_type)
    if _is_json(media_type):
        try:
            payload = json.loads(body)
            converted = convert_map_keys(payload, camel_to_snake)
            return json.dumps(converted, ensure_ascii=False).encode("utf-8")
        except (ValueError, RecursionError) as e:
            logger.debug("Leaving undecodable JSON body untouched (%d bytes): %s", len(body), type(e).__name__)
            return body
    if media_type == FORM_CONTENT_TYPE:
        return convert_query_string(body)
    if media_type == MULTIPART_CONTENT_TYPE:
        return convert_multipart(body, options.get(b"boundary", b""))
    return body


class SnakeCaseParamsMiddleware:
    """Rewrite request query and body parameter names to snake_case."""

    def __init__(self, app: ASGIApp, convert_query_params: bool = True, convert_body_params: bool = True):
        self.app = app
        self.convert_query_params = convert_query_params
        self.convert_body_params = convert_body_params

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        scope = dict(scope)
        if self.convert_query_params:
            scope["query_string"] = convert_query_string(scope.get("query_string", b""))

        content_type = _content_type(scope.get("headers", []))
        media_type, _ = _parse_content_type(content_type)
        if not self.convert_body_params or not _is_convertible(media_type):
            await self.app(scope, receive, send)
            return

        body = await self._read_body(receive)
        converted = convert_body(body, content_type)
        scope["headers"] = self._with_content_length(scope.get("headers", []), len(converted))
        logger.debug("Converted %s body params for %s", media_type, scope.get("path"))

        sent = False

        async def replay() -> Message:
            nonlocal sent
            if sent:
                return await receive()
            sent = True
            return {"type": "http.request", "body": converted, "more_body": False}

        await self.app(scope, replay, send)

    @staticmethod
    async def _read_body(receive: Receive) -> bytes:
        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    @staticmethod
    def _with_content_length(headers: Any, length: int) -> list[tuple[bytes, bytes]]:
        kept = [(k, v) for k, v in headers if k.lower() != b"content-length"]
        kept.append((b"content-length", str(length).encode("latin-1")))
        return kept
