"""
ego qr  ──  write a QR code (SVG) for a text
"""
import qrcode
import qrcode.image.svg

from ..utils.file_utils import next_free_path
from ..utils.logging import spinner, warn

NAME = "qr"
DESCRIPTION = "Creates an image file with a QR code from a text."
SYNTAX = "TEXT [options]"
EXAMPLES = [
    'ego qr "https://example.com"',
    'ego qr "https://github.com" --width=512',
    'ego qr "https://github.com" --margin=2',
    'ego qr "https://github.com" --scale=2',
]

BASE_NAME = "qrcode"
FILE_EXT = ".svg"


def add_arguments(parser):
    parser.add_argument("text", nargs="?", default="", metavar="TEXT",
                        help="The text to encode")
    parser.add_argument("-m", "--margin", type=int, default=4, metavar="N",
                        help="The margin, in modules (default: 4)")
    parser.add_argument("-s", "--scale", type=int, default=4, metavar="N",
                        help="Scale factor, pixels per module (default: 4)")
    parser.add_argument("-w", "--width", type=int, default=1024, metavar="N",
                        help="The width, in pixels (default: 1024)")


def make_svg(text: str, margin: int = 4, scale: int = 4, width: int = 1024):
    qr = qrcode.QRCode(border=max(margin, 0), box_size=max(scale, 1))
    qr.add_data(text)
    qr.make(fit=True)
    image = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
    if width > 0:
        # the viewBox keeps the drawing, only the rendered size changes
        root = image.get_image()
        root.set("width", f"{width}")
        root.set("height", f"{width}")
    return image


def execute(ctx):
    text = ctx.args.text
    if text == "":
        warn("Please define a text!")
        ctx.exit(1)

    with spinner("Searching for output filename ...") as sp:
        output = next_free_path(ctx.cwd, BASE_NAME, FILE_EXT)
        sp.text = f"Found name for output file: '{output.name}'"

    with spinner(f"Creating QR code with '{text}' ...") as sp:
        image = make_svg(text, ctx.args.margin, ctx.args.scale, ctx.args.width)
        with output.open("wb") as fh:
            image.save(fh)
        sp.text = f"Saved QR code with '{text}' to '{output}'"
