"""
ego docker-up  ──  shorthand for 'docker-compose up'
"""
from ..utils.process import spawn_interactive

NAME = "docker-up"
DESCRIPTION = "Shorthand for 'docker-compose up'."
SYNTAX = "[options]"
EXAMPLES = ["ego docker-up"]


def add_arguments(parser):
    pass


def execute(ctx):
    return spawn_interactive("docker-compose", ["up"], cwd=ctx.cwd)
