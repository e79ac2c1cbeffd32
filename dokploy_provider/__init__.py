"""Declarative-infrastructure provider for the Dokploy deployment platform."""

__version__ = "0.4.0"
