"""
Tests for the 'serve' file server and the 'api' dispatcher, run against real
servers bound to a free local port.
"""
import socket
import tempfile
import threading
import unittest
from pathlib import Path

import requests


def _start(handler_class, context, home):
    from egocli.config import AppConfig
    from egocli.core.http import create_server
    config = AppConfig(home=home, cwd=home)
    server = create_server(0, handler_class, config, context=context,
                           force_http=True, host="127.0.0.1")
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    base = f"http://127.0.0.1:{server.server_address[1]}"
    return server, thread, base


def _stop(server, thread):
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


class TestFileServer(unittest.TestCase):

    def setUp(self):
        from egocli.core.fileserver import FileServerHandler
        self.tmpdir = tempfile.TemporaryDirectory()
        base = Path(self.tmpdir.name).resolve()
        self.root = base / "share"
        (self.root / "sub").mkdir(parents=True)
        (self.root / "empty").mkdir()
        (self.root / "a.txt").write_text("hello", encoding="utf-8")
        (self.root / "B.txt").write_text("b", encoding="utf-8")
        (self.root / ".secret").write_text("no", encoding="utf-8")
        (base / "outside.txt").write_text("no", encoding="utf-8")
        self.server, self.thread, self.base = _start(FileServerHandler, self.root, base)

    def tearDown(self):
        _stop(self.server, self.thread)
        self.tmpdir.cleanup()

    def test_directory_listing(self):
        """The root lists folders and files, hidden entries left out."""
        resp = requests.get(self.base + "/", timeout=5)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["Content-Type"].startswith("text/html"))
        self.assertEqual(resp.headers["X-Powered-By"], "ego-cli")
        self.assertIn("Last-Modified", resp.headers)
        body = resp.text
        self.assertIn("a.txt", body)
        self.assertIn("sub", body)
        self.assertNotIn(".secret", body)
        # folders first, then files sorted case-insensitively
        self.assertLess(body.index("empty"), body.index("a.txt"))
        self.assertLess(body.index("a.txt"), body.index("B.txt"))

    def test_empty_directory(self):
        """An empty folder says so."""
        resp = requests.get(self.base + "/", params={"p": "empty"}, timeout=5)
        self.assertEqual(resp.status_code, 200)
        self.assertIn("The directory is empty.", resp.text)

    def test_file_download(self):
        """Files are sent as attachments."""
        resp = requests.get(self.base + "/", params={"p": "/a.txt"}, timeout=5)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "hello")
        self.assertIn("attachment", resp.headers["Content-Disposition"])
        self.assertTrue(resp.headers["Content-Type"].startswith("text/plain"))

    def test_hidden_and_outside_paths(self):
        """Dot paths, paths leaving the root and missing paths are 404."""
        for p in (".secret", "../outside.txt", "sub/../.secret", "missing.txt"):
            resp = requests.get(self.base + "/", params={"p": p}, timeout=5)
            self.assertEqual(resp.status_code, 404, msg=p)

    def test_other_routes(self):
        """Only '/' is served."""
        self.assertEqual(requests.get(self.base + "/favicon.ico", timeout=5).status_code, 404)


ENDPOINTS = {
    "hello.py": "def GET(request, context):\n    return 200, 'Hello, ego!'\n",
    "echo/index.py": (
        "def request(request, context):\n"
        "    return {'method': request.method, 'body': request.text, 'q': request.query.get('q')}\n"
    ),
    "readonly.py": "VALUE = 1\n",
    "boom.py": "def GET(request, context):\n    raise RuntimeError('boom')\n",
    "nothing.py": "def DELETE(request, context):\n    return None\n",
    "_private.py": "def GET(request, context):\n    return 'secret'\n",
    "teapot.py": (
        "from egocli.core.api import ApiResponse\n"
        "def GET(request, context):\n"
        "    return ApiResponse(status=418, body='short and stout', headers={'X-Tea': 'yes'})\n"
    ),
    "index.py": "def GET(request, context):\n    return 'root'\n",
}


class ApiServerMixin:

    bearer = ""
    username = ""
    password = ""

    def setUp(self):
        from egocli.core.api import ApiRequestHandler, ApiSettings
        from egocli.core.queue import ExecutionQueue
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name).resolve()
        for name, source in ENDPOINTS.items():
            path = self.root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        self.queue = ExecutionQueue()
        settings = ApiSettings(root=self.root, context=None, queue=self.queue,
                               bearer=self.bearer, username=self.username, password=self.password)
        self.server, self.thread, self.base = _start(ApiRequestHandler, settings, self.root)

    def tearDown(self):
        _stop(self.server, self.thread)
        self.queue.shutdown()
        self.tmpdir.cleanup()


class TestApiDispatch(ApiServerMixin, unittest.TestCase):

    def test_method_handler(self):
        """GET /api/hello runs GET() of hello.py."""
        resp = requests.get(self.base + "/api/hello", timeout=5)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "Hello, ego!")

    def test_index_and_request_fallback(self):
        """/api/echo uses echo/index.py and falls back to request()."""
        resp = requests.post(self.base + "/api/echo", params={"q": "x"}, data="payload", timeout=5)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"method": "POST", "body": "payload", "q": ["x"]})

    def test_root_index(self):
        """/api/ is answered by index.py."""
        self.assertEqual(requests.get(self.base + "/api/", timeout=5).text, "root")

    def test_missing_script(self):
        """No script: 404; segments with a leading _ are ignored."""
        self.assertEqual(requests.get(self.base + "/api/unknown", timeout=5).status_code, 404)
        self.assertEqual(requests.get(self.base + "/api/_private", timeout=5).status_code, 404)
        self.assertEqual(requests.get(self.base + "/other", timeout=5).status_code, 404)

    def test_no_handler(self):
        """A script without a matching function answers 405."""
        self.assertEqual(requests.get(self.base + "/api/readonly", timeout=5).status_code, 405)
        self.assertEqual(requests.get(self.base + "/api/nothing", timeout=5).status_code, 405)

    def test_none_is_no_content(self):
        """Returning None gives 204."""
        self.assertEqual(requests.delete(self.base + "/api/nothing", timeout=5).status_code, 204)

    def test_handler_error(self):
        """Exceptions become 500 with the error text."""
        resp = requests.get(self.base + "/api/boom", timeout=5)
        self.assertEqual(resp.status_code, 500)
        self.assertIn("boom", resp.text)

    def test_malformed_content_length(self):
        """A broken request header still gets an answer: 500."""
        port = self.server.server_address[1]
        with socket.create_connection(("127.0.0.1", port), timeout=5) as sock:
            sock.sendall(b"POST /api/hello HTTP/1.1\r\nHost: localhost\r\n"
                         b"Content-Length: abc\r\nConnection: close\r\n\r\n")
            answer = b""
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                answer += chunk
        self.assertTrue(answer.startswith(b"HTTP/1.0 500"), answer[:40])

    def test_api_response(self):
        """ApiResponse controls status and headers."""
        resp = requests.get(self.base + "/api/teapot", timeout=5)
        self.assertEqual(resp.status_code, 418)
        self.assertEqual(resp.headers["X-Tea"], "yes")
        self.assertEqual(resp.text, "short and stout")


class TestApiBearer(ApiServerMixin, unittest.TestCase):
    bearer = "footoken"

    def test_bearer_required(self):
        """Without the right bearer token the API answers 401."""
        url = self.base + "/api/hello"
        self.assertEqual(requests.get(url, timeout=5).status_code, 401)
        bad = {"Authorization": "Bearer nope"}
        self.assertEqual(requests.get(url, headers=bad, timeout=5).status_code, 401)
        good = {"Authorization": "Bearer footoken"}
        self.assertEqual(requests.get(url, headers=good, timeout=5).status_code, 200)


class TestApiBasicAuth(ApiServerMixin, unittest.TestCase):
    username = "tanja"
    password = "19790905"

    def test_basic_auth(self):
        """User names compare case-insensitively, passwords exactly."""
        url = self.base + "/api/hello"
        resp = requests.get(url, timeout=5)
        self.assertEqual(resp.status_code, 401)
        self.assertIn("WWW-Authenticate", resp.headers)
        self.assertEqual(requests.get(url, auth=("TANJA", "19790905"), timeout=5).status_code, 200)
        self.assertEqual(requests.get(url, auth=("tanja", "wrong"), timeout=5).status_code, 401)
        broken = {"Authorization": "Basic %%%"}
        self.assertEqual(requests.get(url, headers=broken, timeout=5).status_code, 401)


class TestApiHelpers(unittest.TestCase):

    def test_find_script_file(self):
        """Candidates are <path>.py then <path>/index.py, never outside the root."""
        from egocli.core.api import find_script_file
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "foo").mkdir()
            (root / "foo" / "bar.py").write_text("", encoding="utf-8")
            (root / "foo" / "index.py").write_text("", encoding="utf-8")
            self.assertEqual(find_script_file(root, "/foo/bar"), root / "foo" / "bar.py")
            self.assertEqual(find_script_file(root, "/foo"), root / "foo" / "index.py")
            self.assertEqual(find_script_file(root, "/../foo/bar"), root / "foo" / "bar.py")
            self.assertIsNone(find_script_file(root, "/foo/_bar"))
            self.assertIsNone(find_script_file(root, "/nope"))

    def test_to_response(self):
        """Handler results map to status, body and content type."""
        from egocli.core.api import to_response
        self.assertEqual(to_response(None).status, 204)
        r = to_response((201, {"id": 1}, {"Location": "/api/x/1"}))
        self.assertEqual((r.status, r.body, r.headers["Location"]), (201, '{"id": 1}', "/api/x/1"))
        self.assertTrue(to_response("hi").content_type.startswith("text/plain"))
        self.assertEqual(to_response(b"\x00").content_type, "application/octet-stream")


if __name__ == "__main__":
    unittest.main()
