"""Host-agnostic reformatting engine that keeps selections in place."""

__all__ = [
    "adapters",
    "buffer",
    "formatting",
    "replacements",
    "runtime",
    "selections",
    "session",
    "styles",
]

__version__ = "0.1.0"
