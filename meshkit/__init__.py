"""Structured errors, Kubernetes endpoint and service helpers, Artifact Hub lookup, Compose checks and messaging."""

__version__ = "0.1.0"