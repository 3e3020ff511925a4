"""Errors raised by the suggestion engine."""


class SuggestionBackendError(RuntimeError):
    """The multi-search round trip failed; no partial results are available."""
