"""whatdo - a git-based task tree for tracking what to do next."""

__version__ = "0.1.0"
