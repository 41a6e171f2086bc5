"""Top-level package for nocodb_client."""
from __future__ import annotations

__version__ = "0.1.0"
__all__ = [
    "Client",
    "ClientBuilder",
    "ClientSettings",
    "Filter",
    "FilterGroup",
    "ListResponse",
    "ReadResponse",
    "PageInfo",
    "Table",
    "new_client",
]

_LAZY = {
    "Client": ".client",
    "ClientBuilder": ".client",
    "new_client": ".client",
    "ClientSettings": ".config",
    "Filter": ".filters",
    "FilterGroup": ".filters",
    "ListResponse": ".responses",
    "ReadResponse": ".responses",
    "PageInfo": ".responses",
    "Table": ".table",
}


def __getattr__(name):  # type: ignore[override]
    if name in _LAZY:
        from importlib import import_module

        return getattr(import_module(_LAZY[name], __name__), name)
    raise AttributeError(name)
