"""
Directory listing / file download handler for ``ego serve``
"""
import html
import os
import shutil
from pathlib import Path
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

from ..utils.file_utils import get_mime_type, human_size
from .http import EgoRequestHandler

PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
table {{ border-collapse: collapse; width: 100%; }}
th, td {{ text-align: left; padding: .3em .8em; border-bottom: 1px solid #ddd; }}
.ego-size {{ text-align: right; }}
.breadcrumb a {{ text-decoration: none; }}
</style>
</head>
<body>
{content}
</body>
</html>
"""


def resolve_request_path(root: Path, requested: str) -> Optional[Path]:
    """
    Map the ``p`` query value onto a path below *root*. Returns None when the
    result leaves *root* or any part of it starts with a dot.
    """
    current = (requested or "").strip().replace("\\", "/").lstrip("/").strip()
    root = root.resolve()
    full = (root / current).resolve()
    if full != root and root not in full.parents:
        return None
    rel_parts = full.relative_to(root).parts
    if any(part.strip().startswith(".") for part in rel_parts):
        return None
    return full


def _link(rel: str) -> str:
    return "/?p=" + quote(rel, safe="")


def render_directory(root: Path, directory: Path) -> str:
    rel = directory.relative_to(root.resolve()).as_posix()
    rel = "" if rel == "." else rel

    crumbs = ['<li><a href="/">&#8962; home</a></li>']
    walked = []
    for part in [p for p in rel.split("/") if p.strip()]:
        walked.append(part)
        crumbs.append(f'<li><a href="{_link("/".join(walked))}">{html.escape(part)}</a></li>')
    content = f'<nav><ol class="breadcrumb">{"".join(crumbs)}</ol></nav>'

    folders, files = [], []
    for entry in os.scandir(directory):
        if entry.name.strip().startswith("."):
            continue
        (folders if entry.is_dir() else files).append(entry)

    if not folders and not files:
        return content + "<p>The directory is empty.</p>"

    rows = []
    for f in sorted(folders, key=lambda e: e.name.lower().strip()):
        href = _link(f"{rel}/{f.name}" if rel else f.name)
        rows.append(
            f'<tr><td class="ego-name"><a href="{href}">{html.escape(f.name)}</a></td>'
            f'<td class="ego-type ego-dir">{html.escape("<DIR>")}</td>'
            f'<td class="ego-size ego-dir">&nbsp;</td></tr>'
        )
    for f in sorted(files, key=lambda e: e.name.lower().strip()):
        href = _link(f"{rel}/{f.name}" if rel else f.name)
        size = f.stat().st_size
        rows.append(
            f'<tr><td class="ego-name"><a href="{href}" target="_blank">{html.escape(f.name)}</a></td>'
            f'<td class="ego-type">{html.escape(get_mime_type(f.name))}</td>'
            f'<td class="ego-size ego-file" title="{size}">{human_size(size)}</td></tr>'
        )
    content += (
        "<table><thead><tr><th>Name</th><th>Type</th><th>Size</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody></table>"
    )
    return content


class FileServerHandler(EgoRequestHandler):
    """``server.context`` is the root directory (Path) to share."""

    def do_GET(self):
        try:
            self._serve()
        except Exception as exc:
            self.log_request_error(exc)
            self.send_body(500, b"", "text/plain; charset=utf-8")

    do_HEAD = do_GET

    def _serve(self):
        url = urlsplit(self.path)
        if url.path != "/":
            return self.send_empty(404)

        root = Path(self.server.context)
        requested = parse_qs(url.query).get("p", [""])[0]
        target = resolve_request_path(root, requested)
        if target is None or not target.exists():
            return self.send_empty(404)

        if target.is_dir():
            title = html.escape(target.name or str(target))
            page = PAGE.format(title=title, content=render_directory(root, target))
            return self.send_body(200, page.encode("utf-8"), "text/html; charset=utf-8")
        self._send_file(target)

    def _send_file(self, path: Path):
        size = path.stat().st_size
        with path.open("rb") as fh:
            self.send_response(200)
            self.send_header("Content-Type", get_mime_type(path.name))
            self.send_header("Content-Disposition", f'attachment; filename="{path.name}"')
            self.send_header("Content-Length", str(size))
            self.end_headers()
            if self.command != "HEAD":
                shutil.copyfileobj(fh, self.wfile)
