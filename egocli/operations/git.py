"""
Git helpers (branches, remotes)
"""
from pathlib import Path
from typing import Optional

from ..utils.process import spawn


def _lines(output: str) -> list[str]:
    return output.split("\n")


def get_current_branch(cwd: Optional[Path] = None) -> str:
    """Name of the checked out branch."""
    return spawn("git", ["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, capture=True).strip()


def get_branches(cwd: Optional[Path] = None) -> list[str]:
    """Local branches, the current one first (without its ``*`` marker)."""
    lines = _lines(spawn("git", ["branch"], cwd=cwd, capture=True))
    # stable sort keeps git's order for the rest
    lines.sort(key=lambda b: 0 if b.strip().startswith("* ") else 1)
    branches = []
    for b in lines:
        b = b.strip()
        if b.startswith("*"):
            b = b[1:].strip()
        if b:
            branches.append(b)
    return branches


def get_remotes(cwd: Optional[Path] = None) -> list[str]:
    """Remote names, ``origin`` first."""
    lines = _lines(spawn("git", ["remote"], cwd=cwd, capture=True))
    lines.sort(key=lambda r: 0 if r.strip() == "origin" else 1)
    return [r.strip() for r in lines if r.strip()]
