"""
ego csv-split  ──  split (huge) CSV files into parts with a fixed number of rows
"""
import csv
import os
from pathlib import Path
from typing import Optional

from ..utils.logging import colorize, spinner, warn

NAME = "csv-split"
DESCRIPTION = "Splits one or more (huge) CSV file(s) into separate parts."
SYNTAX = "FILE+ [options]"
EXAMPLES = ["ego csv-split my-file.csv", "ego csv-split my-file-1.csv my-file-2.csv --lines=5979"]

DEFAULT_LINES = 10000


def add_arguments(parser):
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="The CSV file(s) to split")
    parser.add_argument("-e", "--escape", default=None, metavar="CHAR",
                        help="The escape character (default: the quote character)")
    parser.add_argument("--enc", "--encoding", dest="encoding", default="utf-8", metavar="NAME",
                        help="The encoding to use (default: utf-8)")
    parser.add_argument("-l", "--lines", type=int, default=DEFAULT_LINES, metavar="N",
                        help=f"Maximum number of rows per file (default: {DEFAULT_LINES})")
    parser.add_argument("--lf", "--line-feed", dest="line_feed", action="store_true",
                        help="Use LF instead of CRLF for new lines")
    parser.add_argument("-o", "--out", default="", metavar="DIR",
                        help="The output directory (default: current working directory)")
    parser.add_argument("-q", "--quote", default='"', metavar="CHAR",
                        help="The character that denotes a quoted value (default: \")")
    parser.add_argument("-s", "--separator", default=",", metavar="CHAR",
                        help="The column separator (default: ,)")
    parser.epilog = (parser.epilog or "") + (
        "\n\nEvery part repeats the header row and is named '<name>-<N><ext>'."
        "\nRelative paths are mapped to the current working directory."
    )


def trim_filename(name: str, max_size: int = 20) -> str:
    base, ext = os.path.splitext(os.path.basename(name))
    base = base.strip()
    if len(base) > max_size:
        base = base[:max_size] + "…"
    return base + ext


def part_path(out_dir: Path, source: Path, chunk: int) -> Path:
    """``<stem>-<chunk><ext>``, or ``<stem>-<chunk>-<i>`` when taken."""
    candidate = out_dir / f"{source.stem}-{chunk}{source.suffix}"
    i = 0
    while candidate.exists():
        candidate = out_dir / f"{source.stem}-{chunk}-{i}{source.suffix}"
        i += 1
    return candidate


def split_csv_file(source: Path, out_dir: Path, max_lines: int = DEFAULT_LINES,
                   separator: str = ",", quote: str = '"', escape: Optional[str] = None,
                   encoding: str = "utf-8", newline: str = "\r\n") -> list[Path]:
    """
    Write the data rows of *source* into parts of at most *max_lines* rows,
    each starting with the header row. Returns the written files.
    """
    dialect = dict(delimiter=separator, quotechar=quote)
    if escape is not None and escape != quote:
        dialect.update(escapechar=escape, doublequote=False)

    out_dir.mkdir(parents=True, exist_ok=True)
    parts = []
    out = writer = None
    with source.open("r", encoding=encoding, newline="") as fh:
        reader = csv.reader(fh, **dialect)
        header = next(reader, None)
        if header is None:
            return parts
        try:
            for i, row in enumerate(reader):
                if i % max_lines == 0:
                    if out is not None:
                        out.close()
                    target = part_path(out_dir, source, len(parts))
                    out = target.open("w", encoding=encoding, newline="")
                    writer = csv.writer(out, lineterminator=newline, **dialect)
                    writer.writerow(header)
                    parts.append(target)
                writer.writerow(row)
        finally:
            if out is not None:
                out.close()
    return parts


def execute(ctx):
    args = ctx.args
    files = [f for f in args.files if str(f).strip()]
    if not files:
        warn("Please define at least one CSV file, you would like to handle!")
        ctx.exit(1)

    for name, value in (("separator", args.separator), ("quote", args.quote), ("escape", args.escape)):
        if value is not None and len(value) != 1:
            warn(f"The {name} must be exactly one character!")
            ctx.exit(2)

    out_dir = ctx.get_full_path(args.out) if args.out.strip() else ctx.cwd
    max_lines = args.lines if args.lines > 0 else DEFAULT_LINES
    newline = "\n" if args.line_feed else "\r\n"

    for f in files:
        source = ctx.get_full_path(f)
        label = colorize(trim_filename(f))
        with spinner(f"Splitting {label} ...") as sp:
            parts = split_csv_file(source, out_dir, max_lines, args.separator, args.quote,
                                   args.escape, args.encoding, newline)
            sp.text = f"{label} split into {len(parts)} part(s)"
