"""
ego aptdate  ──  apt-get update, upgrade and autoremove in one go
"""
import os
import sys

from ..utils.logging import spinner, warn
from ..utils.process import ProcessError, spawn

NAME = "aptdate"
DESCRIPTION = "Runs 'apt-get update', 'apt-get upgrade' and 'apt-get autoremove' in one command."
SYNTAX = "[options]"
EXAMPLES = ["ego aptdate"]

STEPS = ("update", "upgrade", "autoremove")


def add_arguments(parser):
    pass


def is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def execute(ctx):
    if not sys.platform.startswith("linux"):
        warn("You only can run the command with linux and 'apt-get'!")
        ctx.exit(1)

    if not is_root():
        warn("You require root privileges (sudo)!")
        ctx.exit(3)

    with spinner("Checking for 'apt-get' ...") as sp:
        try:
            spawn("apt-get", ["-v"], cwd=ctx.cwd)
            sp.text = "'apt-get' is installed"
            installed = True
        except (OSError, ProcessError):
            sp.warn("'apt-get' is NOT installed")
            installed = False
    if not installed:
        ctx.exit(2)

    for step in STEPS:
        with spinner(f"Executing 'apt-get -y {step}' ...") as sp:
            spawn("apt-get", ["-y", step], cwd=ctx.cwd)
            sp.text = f"'apt-get -y {step}' executed"
