"""
ego api  ──  REST API from Python scripts in a directory
"""
from .. import config as _cfg
from ..core.api import ApiRequestHandler, ApiSettings
from ..core.http import create_server, serve_until_enter

NAME = "api"
DESCRIPTION = "Runs a REST API from the Python scripts of the current directory."
SYNTAX = "[options]"
EXAMPLES = [
    "ego api",
    "ego api --port=23979",
    "ego api --bearer=footoken",
    "ego api --user=tanja --password=19790905",
]

EXAMPLE_ENDPOINT = '''
    # other methods ('POST', 'DELETE', ...) are implemented
    # by their names in upper case characters
    def GET(request, context):
        return 200, "Hello, ego!"

    # handles any HTTP method and/or is used as fallback
    def request(request, context):
        return 501, ""
'''


def add_arguments(parser):
    parser.add_argument("-b", "--bearer", default="", metavar="TOKEN",
                        help="Optional 'Bearer' token for the 'Authorization' request header")
    parser.add_argument("--http", action="store_true",
                        help="Force insecure HTTP, even if a certificate exists")
    parser.add_argument("-p", "--port", type=int, default=_cfg.API_PORT, metavar="N",
                        help=f"The custom TCP port (default: {_cfg.API_PORT})")
    parser.add_argument("-P", "--password", default="", metavar="PWD",
                        help="The password for basic authorization")
    parser.add_argument("-r", "--root", default="", metavar="DIR",
                        help="Custom root directory (default: current working directory)")
    parser.add_argument("-u", "--user", default="", metavar="NAME",
                        help="The user name for basic authorization")
    parser.epilog = (parser.epilog or "") + (
        "\n\nExample endpoint ('index.py'):\n" + EXAMPLE_ENDPOINT +
        "\nTo create another endpoint, like '/api/foo/bar', use one of these file paths:"
        "\n  * foo/bar.py\n  * foo/bar/index.py"
        "\n\nPath segments with a leading _ are ignored."
    )


def execute(ctx):
    args = ctx.args
    root = ctx.get_full_path(args.root) if args.root.strip() else ctx.cwd

    settings = ApiSettings(
        root=root,
        context=ctx,
        queue=ctx.queue,
        bearer=args.bearer.strip(),
        username=args.user.lower().strip(),
        password=args.password,
    )
    server = create_server(args.port, ApiRequestHandler, ctx.config,
                           context=settings, force_http=args.http)
    serve_until_enter(server, "API host", "/api/")
