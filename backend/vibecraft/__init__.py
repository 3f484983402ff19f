"""Vibecraft agent event protocol: normalization and dispatch of agent activity."""

__version__ = "0.1.0"
