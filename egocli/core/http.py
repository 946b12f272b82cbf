"""
HTTP server helpers shared by ``serve`` and ``api``
"""
import socket
import ssl
import threading
from email.utils import formatdate
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

import psutil

from ..config import AppConfig
from ..utils.logging import err, is_verbose, spinner, wait_for_enter, write_line

POWERED_BY = "ego-cli"


class EgoHTTPServer(ThreadingHTTPServer):
    """ThreadingHTTPServer that knows whether it speaks TLS and whom it serves."""
    daemon_threads = True

    def __init__(self, address, handler_class, context=None, https: bool = False):
        self.context = context
        self.https = https
        super().__init__(address, handler_class)

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"


class EgoRequestHandler(BaseHTTPRequestHandler):
    """Base handler: common headers, small send helpers, quiet logging."""
    server_version = POWERED_BY

    def end_headers(self):
        self.send_header("X-Powered-By", POWERED_BY)
        self.send_header("Last-Modified", formatdate(usegmt=True))
        super().end_headers()

    def send_body(self, status: int, body: bytes = b"", content_type: Optional[str] = None,
                  headers: Optional[dict] = None):
        self.send_response(status)
        if content_type:
            self.send_header("Content-Type", content_type)
        for name, value in (headers or {}).items():
            self.send_header(name, str(value))
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body and self.command != "HEAD":
            self.wfile.write(body)

    def send_empty(self, status: int, headers: Optional[dict] = None):
        self.send_body(status, b"", headers=headers)

    def log_message(self, format, *args):
        if is_verbose():
            super().log_message(format, *args)

    def log_request_error(self, exc: BaseException):
        if is_verbose():
            err()
            err(f"REQUEST ERROR [{self.command} :: {self.path}] => {exc}")


def create_server(port: int, handler_class, config: AppConfig, context=None,
                  force_http: bool = False, host: str = "") -> EgoHTTPServer:
    """
    Bind a threading HTTP server on *port*. When ``server.cert`` and
    ``server.key`` exist in the ego home folder (see ``ego ssl-new``) and
    *force_http* is False, the socket is wrapped with TLS.
    """
    use_tls = not force_http and config.cert_file.is_file() and config.key_file.is_file()
    server = EgoHTTPServer((host, port), handler_class, context=context, https=use_tls)
    if use_tls:
        tls = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        tls.load_cert_chain(certfile=str(config.cert_file), keyfile=str(config.key_file))
        server.socket = tls.wrap_socket(server.socket, server_side=True)
    return server


def list_base_urls(scheme: str, port: int, suffix: str = "/") -> list[str]:
    """
    URLs a server is reachable at: external interface addresses (IPv4 before
    IPv6, loopback left out) followed by localhost and 127.0.0.1.
    """
    urls = []
    interfaces = psutil.net_if_addrs()
    for ifname in sorted(interfaces, key=lambda n: n.lower().strip()):
        addrs = interfaces[ifname]
        candidates = []
        for a in addrs:
            address = str(a.address).lower().strip()
            if a.family == socket.AF_INET:
                if address.startswith("127.") or address == "localhost":
                    continue
                candidates.append((0, address))
            elif a.family == socket.AF_INET6:
                if address in ("::1", "") or address.startswith("fe80"):
                    continue
                candidates.append((1, f"[{address.split('%')[0]}]"))
        for _, host in sorted(candidates, key=lambda c: c[0]):
            urls.append(f"{scheme}://{host}:{port}{suffix}")
    urls.append(f"{scheme}://localhost:{port}{suffix}")
    urls.append(f"{scheme}://127.0.0.1:{port}{suffix}")
    return urls


def serve_until_enter(server: EgoHTTPServer, label: str, suffix: str = "/"):
    """Run *server* in a background thread until the user presses ENTER."""
    port = server.server_address[1]
    with spinner(f"Starting {label} on port {port} ...") as sp:
        thread = threading.Thread(target=server.serve_forever, name=f"ego-{label}", daemon=True)
        thread.start()
        sp.text = f"{label[:1].upper()}{label[1:]} now running on port {port}"

    write_line()
    write_line("You can now access it from the following base URLs:")
    write_line()
    for url in list_base_urls(server.scheme, port, suffix):
        write_line(f"    {url}")
    write_line()

    try:
        wait_for_enter("Press <ENTER> to stop ...\n")
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
