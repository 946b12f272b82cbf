"""
Convention based REST dispatcher for ``ego api``

``/api/foo/bar`` is answered by ``<root>/foo/bar.py`` or, when that file does
not exist, ``<root>/foo/bar/index.py``. The script is loaded fresh for every
request and must expose a function named after the HTTP method (``GET``,
``POST``, ...) or ``request`` as fallback:

    def GET(request, context):
        return 200, "Hello, ego!"
"""
import base64
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
from urllib.parse import parse_qs, unquote, urlsplit

from ..utils.logging import is_verbose, write_line
from .http import EgoRequestHandler
from .plugins import get_function, load_module
from .queue import ExecutionQueue

API_PREFIX = "/api"
WWW_AUTHENTICATE = "API by ego-cli"

# characters that are not allowed in a path segment
_UNSAFE_CHARS = re.compile(r'[/\\?%*:|"<>\x00-\x1f\x7f]')


@dataclass
class ApiRequest:
    method: str
    path: str
    query: dict
    headers: Any
    body: bytes
    script: Path

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self):
        return json.loads(self.body or b"null")


@dataclass
class ApiResponse:
    status: int = 200
    body: Any = b""
    headers: dict = field(default_factory=dict)
    content_type: Optional[str] = None


@dataclass
class ApiSettings:
    """What the handler needs to know; stored as ``server.context``."""
    root: Path
    context: Any
    queue: ExecutionQueue
    bearer: str = ""
    username: str = ""
    password: str = ""

    @property
    def basic_auth(self) -> bool:
        return self.username != "" or self.password.strip() != ""


def sanitize_segment(segment: str) -> str:
    cleaned = _UNSAFE_CHARS.sub("", segment).strip()
    if cleaned in (".", ".."):
        return ""
    return cleaned.rstrip(". ")


def find_script_file(root: Path, api_path: str) -> Optional[Path]:
    """
    Script file for *api_path* (the part after ``/api``) below *root*, or
    None. Paths with a segment starting with ``_`` are never resolved.
    """
    segments = [sanitize_segment(s.strip()) for s in api_path.replace("\\", "/").split("/")]
    segments = [s for s in segments if s]
    if any(s.startswith("_") for s in segments):
        return None

    root = root.resolve()
    candidates = []
    if segments:
        candidates.append(Path(*segments[:-1], segments[-1] + ".py"))
    candidates.append(Path(*segments, "index.py"))

    for rel in candidates:
        full = (root / rel).resolve()
        if root not in full.parents:
            continue
        if full.is_file():
            return full
    return None


def check_bearer(header: str, token: str) -> bool:
    header = (header or "").strip()
    if not header.lower().startswith("bearer"):
        return False
    return header[6:].strip() == token


def check_basic(header: str, username: str, password: str) -> bool:
    header = (header or "").strip()
    if not header.lower().startswith("basic"):
        return False
    encoded = header[5:].strip()
    if not encoded:
        return False
    decoded = base64.b64decode(encoded).decode("utf-8")
    user, _, pwd = decoded.partition(":")
    return user.lower().strip() == username and pwd == password


def to_response(result) -> ApiResponse:
    """
    Turn a handler's return value into an ApiResponse:
    None -> 204, (status, body[, headers]), str, bytes, or anything JSON
    serializable.
    """
    if result is None:
        return ApiResponse(status=204)
    if isinstance(result, ApiResponse):
        return result
    if isinstance(result, tuple):
        status, body, *rest = result
        response = to_response(body)
        response.status = int(status)
        if rest:
            response.headers.update(rest[0])
        return response
    if isinstance(result, str):
        return ApiResponse(body=result, content_type="text/plain; charset=utf-8")
    if isinstance(result, (bytes, bytearray)):
        return ApiResponse(body=bytes(result), content_type="application/octet-stream")
    return ApiResponse(body=json.dumps(result), content_type="application/json; charset=utf-8")


class ApiRequestHandler(EgoRequestHandler):

    def do_GET(self):
        self.handle_api()

    do_HEAD = do_POST = do_PUT = do_PATCH = do_DELETE = do_OPTIONS = do_GET

    @property
    def settings(self) -> ApiSettings:
        return self.server.context

    def handle_api(self):
        try:
            self._dispatch()
        except Exception as exc:
            self.log_request_error(exc)
            self.send_body(500, str(exc).encode("utf-8"), "text/plain; charset=utf-8")

    def _dispatch(self):
        url = urlsplit(self.path)
        path = unquote(url.path)
        if path != API_PREFIX and not path.startswith(API_PREFIX + "/"):
            return self.send_empty(404)
        api_path = path[len(API_PREFIX):]

        if is_verbose():
            write_line()
            write_line(f"API REQUEST [{self.command} :: {api_path}] => " + json.dumps(
                {"headers": dict(self.headers), "query": parse_qs(url.query)}, indent=2))

        body = self._read_body()

        settings = self.settings
        authorization = self.headers.get("Authorization", "")
        if settings.bearer and not check_bearer(authorization, settings.bearer):
            return self.send_empty(401)
        if settings.basic_auth:
            try:
                allowed = check_basic(authorization, settings.username, settings.password)
            except ValueError as exc:
                # broken base64 / utf-8
                self.log_request_error(exc)
                allowed = False
            if not allowed:
                return self.send_empty(401, {"WWW-Authenticate": WWW_AUTHENTICATE})

        script = find_script_file(settings.root, api_path)
        if script is None:
            return self.send_empty(404)

        module = settings.queue.run(load_module, script)
        endpoint = get_function(module, self.command.upper().strip(), "request")
        if endpoint is None:
            return self.send_empty(405)

        request = ApiRequest(method=self.command, path=api_path or "/",
                             query=parse_qs(url.query), headers=self.headers,
                             body=body, script=script)
        self._send_api_response(to_response(endpoint(request, settings.context)))

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _send_api_response(self, response: ApiResponse):
        body = response.body
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.send_body(response.status, body, response.content_type, response.headers)
