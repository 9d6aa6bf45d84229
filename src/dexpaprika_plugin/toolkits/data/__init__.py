from .dexpaprika_toolkit import DexPaprikaToolkit, OrderBy, SortOrder

__all__ = [
    "DexPaprikaToolkit",
    "OrderBy",
    "SortOrder",
]
