"""Dosing exceptions."""


class InvalidArgumentError(ValueError):
    """A dosing input violated a precondition.

    Raised at the function boundary before any arithmetic is attempted.
    The message names the offending field and constraint so callers can
    display it inline.
    """
