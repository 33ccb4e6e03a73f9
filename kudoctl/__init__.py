"""KUDO manifests, command argument checks and local setup, with a kubectl-kudo command."""

__version__ = "0.1.0"