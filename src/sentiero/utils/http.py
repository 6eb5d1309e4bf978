from http.client import responses

from . import jsonenc
from ..models.response import Response

content_type_map = {
    dict: "application/json",
    list: "application/json",
    str: "text/plain; charset=utf-8",
    bytes: "application/octet-stream",
    int: "text/plain; charset=utf-8",
    float: "text/plain; charset=utf-8",
}


def plain(status: int) -> Response:
    return Response(
        body=responses.get(status, "Unknown"),
        status_code=status,
        content_type="text/plain",
    )


def convert_body(resp) -> Response:
    """Coerce a handler result into a ``Response`` with a bytes body.

    Handlers normally return a ``Response``; a ``(body, status)`` tuple, a
    bare ``str``/``dict``/``list`` or ``None`` are accepted as shorthands.
    """
    if isinstance(resp, tuple) and len(resp) == 2:
        resp = Response(body=resp[0], status_code=resp[1])
    elif resp is None or isinstance(resp, (str, bytes, dict, list)):
        resp = Response(body=resp if resp is not None else "")
    elif not isinstance(resp, Response):
        raise ValueError(f"Unsupported response object: {type(resp).__name__}")

    body = resp.body
    if isinstance(body, (dict, list)):
        resp.body = jsonenc.dumps(body)
        content_type = content_type_map[dict]
    elif isinstance(body, str):
        resp.body = body.encode("utf-8")
        content_type = content_type_map[str]
    elif isinstance(body, bytes):
        content_type = content_type_map[bytes]
    elif isinstance(body, (int, float)):
        resp.body = str(body).encode("utf-8")
        content_type = content_type_map[int]
    elif body is None:
        resp.body = b""
        content_type = None
    else:
        raise ValueError(f"Unsupported response body: {type(body).__name__}")

    if not resp.headers.get("Content-Type"):
        if resp.content_type:
            resp.headers["Content-Type"] = resp.content_type
        elif content_type:
            resp.headers["Content-Type"] = content_type
    resp.headers["Content-Length"] = str(len(resp.body))
    return resp
