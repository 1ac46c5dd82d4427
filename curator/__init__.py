"""Build and release tooling: repository configuration, flag sets, command log capture and cache pruning."""

__version__ = "0.1.0"