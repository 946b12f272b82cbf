"""Wrappers around external tools (git, docker)"""
from .git import get_current_branch, get_branches, get_remotes
from .docker import get_running_containers

__all__ = ["get_current_branch", "get_branches", "get_remotes", "get_running_containers"]
