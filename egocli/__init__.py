"""ego  ──  command line tools for developers"""

__version__ = "0.24.0"
