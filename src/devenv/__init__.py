"""devenv: orchestrates git operations across a multi-repository development environment."""

__version__ = "0.1.0"
