from .element import Element
from .matrix import SparseMatrix
from .multiply import multiply
from .store import ElementStore

__all__ = [
    "SparseMatrix",
    "ElementStore",
    "Element",
    "multiply",
]
