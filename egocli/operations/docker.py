"""
Docker helpers
"""
from pathlib import Path
from typing import Optional

from ..utils.process import spawn


def get_running_containers(cwd: Optional[Path] = None) -> list[str]:
    """IDs of all running containers."""
    output = spawn("docker", ["ps", "--format", "{{.ID}}"], cwd=cwd, capture=True)
    return [line.strip() for line in output.split("\n") if line.strip()]
