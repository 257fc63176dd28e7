"""Exceptions raised by llsparse.

All library errors derive from :class:`SparseMatrixError`. Each concrete
error also derives from the closest builtin so callers may catch either.
"""


class SparseMatrixError(Exception):
    """Base exception for all llsparse errors."""


class OutOfBoundsError(SparseMatrixError, IndexError):
    """Element indices fall outside ``[0, nrows) x [0, ncols)``."""

    def __init__(self, row, col, shape):
        self.row = row
        self.col = col
        self.shape = tuple(shape)
        super().__init__(
            f"element ({row}, {col}) is out of bounds for shape {self.shape}"
        )


class InvalidResizeError(SparseMatrixError, ValueError):
    """Resize would shrink a dimension."""

    def __init__(self, old_shape, new_shape):
        self.old_shape = tuple(old_shape)
        self.new_shape = tuple(new_shape)
        super().__init__(
            f"can't reduce matrix size from {self.old_shape} to {self.new_shape}"
        )


class IncompatibleDimensionsError(SparseMatrixError, ValueError):
    """Operand shapes are incompatible for matrix multiplication."""

    def __init__(self, left_shape, right_shape):
        self.left_shape = tuple(left_shape)
        self.right_shape = tuple(right_shape)
        super().__init__(
            f"impossible to multiply matrices of shape {self.left_shape} "
            f"and {self.right_shape}"
        )


class InvariantError(SparseMatrixError, AssertionError):
    """The element store violates its ordering or zero-suppression invariant."""


__all__ = [
    "SparseMatrixError",
    "OutOfBoundsError",
    "InvalidResizeError",
    "IncompatibleDimensionsError",
    "InvariantError",
]
