"""Insulin on Board and dosing safety engine."""

__version__ = "0.1.0"
