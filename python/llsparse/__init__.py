from ._runtime import get_debug_checks, get_print_options, set_debug_checks, set_print_options
from .errors import (
    IncompatibleDimensionsError,
    InvalidResizeError,
    InvariantError,
    OutOfBoundsError,
    SparseMatrixError,
)
from .sparse import SparseMatrix, multiply

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SparseMatrix",
    "multiply",
    "set_print_options",
    "get_print_options",
    "set_debug_checks",
    "get_debug_checks",
    "SparseMatrixError",
    "OutOfBoundsError",
    "InvalidResizeError",
    "IncompatibleDimensionsError",
    "InvariantError",
]
