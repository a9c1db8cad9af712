"""Gitor - command line client for a Gitor server."""

__version__ = "0.1.0"
