"""UI-agnostic toggle highlighting for editor selections."""

__all__ = [
    "adapters",
    "commands",
    "config",
    "runtime",
    "session",
    "spans",
    "surface",
]

__version__ = "0.1.0"
