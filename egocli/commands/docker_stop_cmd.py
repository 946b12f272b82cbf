"""
ego docker-stop  ──  stop all running containers
"""
from ..operations.docker import get_running_containers
from ..utils.logging import spinner
from ..utils.process import spawn

NAME = "docker-stop"
DESCRIPTION = "Stops all running Docker containers."
SYNTAX = "[options]"
EXAMPLES = ["ego docker-stop"]


def add_arguments(parser):
    pass


def execute(ctx):
    with spinner("Loading Docker containers ...") as sp:
        containers = get_running_containers(ctx.cwd)
        sp.text = f"{len(containers)} Docker container(s) found"

    total = len(containers)
    for i, container in enumerate(containers, 1):
        with spinner(f"Stopping '{container}' ({i} / {total}) ...") as sp:
            spawn("docker", ["stop", container], cwd=ctx.cwd)
            sp.text = f"'{container}' stopped ({i} / {total})"
