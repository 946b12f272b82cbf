"""
ego ssl-new  ──  create a self-signed certificate for serve / api
"""
from ..utils.logging import spinner, write_line
from ..utils.process import spawn

NAME = "ssl-new"
DESCRIPTION = "Creates a new self-signed SSL certificate."
SYNTAX = "[options]"
EXAMPLES = ["ego ssl-new", "ego ssl-new -o"]


def add_arguments(parser):
    parser.add_argument("-o", "--overwrite", action="store_true",
                        help="Overwrite existing files")


def output_files(folder, overwrite=False):
    """server.cert/.key, or server-N.cert/.key when taken (unless overwrite)."""
    i = 0
    while True:
        suffix = f"-{i}" if i else ""
        cert, key = folder / f"server{suffix}.cert", folder / f"server{suffix}.key"
        if overwrite or (not cert.exists() and not key.exists()):
            return cert, key
        i += 1


def execute(ctx):
    folder = ctx.config.ensure_home()

    with spinner("Defining output files ...") as sp:
        cert_file, key_file = output_files(folder, ctx.args.overwrite)
        sp.text = "Output files defined"

    if ctx.args.overwrite:
        for f in (cert_file, key_file):
            if f.exists():
                f.unlink()

    spawn("openssl", [
        "req", "-nodes", "-newkey", "rsa:4096", "-x509", "-days", "3650", "-sha256",
        "-keyout", key_file,
        "-out", cert_file,
    ], cwd=ctx.cwd, verbose=True)

    write_line()
    write_line(f"CERT file: {cert_file}")
    write_line(f"KEY file: {key_file}")
