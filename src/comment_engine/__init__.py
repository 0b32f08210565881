"""UI-agnostic smart comment toggling for line-prefix comment languages."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "comments",
    "config",
    "runtime",
    "syntax",
]

__version__ = "0.1.0"
