"""
ego serve  ──  share the working directory over HTTP(S)
"""
from .. import config as _cfg
from ..core.fileserver import FileServerHandler
from ..core.http import create_server, serve_until_enter

NAME = "serve"
DESCRIPTION = "Starts a HTTP server for the current directory."
SYNTAX = "[options]"
EXAMPLES = ["ego serve", "ego serve --port=23979", "ego serve --http"]


def add_arguments(parser):
    parser.add_argument("-p", "--port", type=int, default=_cfg.SERVE_PORT, metavar="N",
                        help=f"The custom TCP port (default: {_cfg.SERVE_PORT})")
    parser.add_argument("--http", action="store_true",
                        help="Force insecure HTTP, even if a certificate exists")


def execute(ctx):
    server = create_server(ctx.args.port, FileServerHandler, ctx.config,
                           context=ctx.cwd, force_http=ctx.args.http)
    serve_until_enter(server, "server", "/")
