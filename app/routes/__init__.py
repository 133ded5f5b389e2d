"""Route modules registered with the shared FunctionApp."""

from . import docs, names, rules  # noqa: F401

__all__ = ["docs", "names", "rules"]
