"""Gitor server - manage bare git repositories over a small HTTP API."""

__version__ = "0.1.0"
