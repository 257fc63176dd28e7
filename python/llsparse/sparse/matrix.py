"""Sparse matrix backed by an ordered list of non-zero records.

:class:`SparseMatrix` stores only non-zero ``(row, col, value)`` records,
kept sorted by row-major position ``row * ncols + col``. It supports element
access and mutation, grow-only resize, in-place transpose and sparse matrix
multiplication without densifying either operand.

Notes
-----
- The element type is any numeric type whose no-argument call returns its
  zero value (``int``, ``float``, ``complex``, ``fractions.Fraction``, NumPy
  scalar types, ...). Stored values are converted with ``dtype(value)``;
  a conversion that changes the value (``int(0.7)``) is rejected, except
  rounding into an inexact float or complex type.
- Explicit zeros are never stored; assigning zero removes the entry.
- Indices are validated before any mutation, so a failed call leaves the
  matrix untouched.
"""

import logging
import operator
import sys

import numpy as np

from .._runtime import get_print_options
from ..errors import InvalidResizeError, OutOfBoundsError
from .multiply import multiply
from .store import ElementStore

logger = logging.getLogger(__name__)


def _scalar_type(dtype):
    if dtype is None:
        return float
    if isinstance(dtype, (np.dtype, str)):
        dtype = np.dtype(dtype)
        if dtype.kind == "O":
            raise TypeError("object dtype has no zero value; pass the element type")
        return dtype.type
    return dtype


def _infer_object_type(arr):
    for value in arr.flat:
        if value != 0:
            return type(value)
    if arr.size:
        return type(arr.flat[0])
    raise TypeError("cannot infer element type of an empty object array; pass dtype")


def _dim(value, name):
    value = operator.index(value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class SparseMatrix:
    """Sparse 2D matrix of a numeric element type.

    Parameters
    ----------
    nrows : int, optional (default: 0)
        Number of rows.
    ncols : int, optional (default: 0)
        Number of columns.
    dtype : type or numpy.dtype, optional (default: float)
        Element type. Calling it with no arguments must give the zero value.

    Attributes
    ----------
    shape : tuple[int, int]
        Matrix dimensions ``(nrows, ncols)``.
    nnz : int
        Number of stored non-zero elements.
    zero : Any
        Zero value of the element type, returned for unstored cells.

    Raises
    ------
    ValueError
        If a dimension is negative.

    Examples
    --------
    >>> from llsparse import SparseMatrix
    >>> a = SparseMatrix(2, 3, dtype=int)
    >>> a[0, 0] = 1
    >>> a[1, 2] = 5
    >>> a.nnz
    2
    >>> print(a)
    1 0 0
    0 0 5
    """

    def __init__(self, nrows=0, ncols=0, dtype=float):
        self._nrows = _dim(nrows, "nrows")
        self._ncols = _dim(ncols, "ncols")
        self._dtype = _scalar_type(dtype)
        self._zero = self._dtype()
        self._store = ElementStore(self._position, self._zero)

    # ---------- Construction ----------

    @classmethod
    def zeros(cls, shape, dtype=float):
        """All-zero matrix of the given ``(nrows, ncols)`` shape."""
        if len(shape) != 2:
            raise ValueError("SparseMatrix requires 2D shape")
        return cls(shape[0], shape[1], dtype=dtype)

    @classmethod
    def eye(cls, n, dtype=float):
        """Square identity matrix of size ``n``."""
        out = cls(n, n, dtype=dtype)
        one = out._convert(1)
        out._store.update((i, i, one) for i in range(out._nrows))
        return out

    @classmethod
    def from_dense(cls, array, dtype=None):
        """Build from a dense 2D array-like, keeping only non-zero cells.

        Parameters
        ----------
        array : array_like
            Two-dimensional input.
        dtype : type or numpy.dtype, optional
            Element type; defaults to the scalar type of ``numpy.asarray(array)``.
            For object arrays it is the type of the first non-zero element.
        """
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError("SparseMatrix requires 2D shape")
        if dtype is None:
            dtype = _infer_object_type(arr) if arr.dtype.kind == "O" else arr.dtype
        out = cls(arr.shape[0], arr.shape[1], dtype=dtype)
        rows, cols = np.nonzero(arr)
        convert = out._convert
        out._store.update(
            (int(r), int(c), convert(arr[r, c])) for r, c in zip(rows, cols)
        )
        return out

    @classmethod
    def from_arrays(cls, row, col, data, shape, dtype=float, check=True):
        """Construct from coordinate arrays.

        Parameters
        ----------
        row, col : array_like of int
            Row and column indices, length ``n``.
        data : array_like
            Values, length ``n``. Zeros are dropped; for repeated coordinates
            the last value wins.
        shape : tuple[int, int]
            Matrix shape.
        dtype : type or numpy.dtype, optional (default: float)
            Element type.
        check : bool, optional (default: True)
            Validate array lengths and index bounds.

        Raises
        ------
        ValueError
            If ``check`` is set and the arrays differ in length.
        OutOfBoundsError
            If ``check`` is set and an index is outside ``shape``.
        """
        out = cls.zeros(shape, dtype=dtype)
        row = np.asarray(row, dtype=np.int64).ravel()
        col = np.asarray(col, dtype=np.int64).ravel()
        data = np.asarray(data).ravel()
        if check:
            if not (row.size == col.size == data.size):
                raise ValueError("row, col and data must have the same length")
            bad = (row < 0) | (row >= out._nrows) | (col < 0) | (col >= out._ncols)
            if bad.any():
                k = int(np.flatnonzero(bad)[0])
                raise OutOfBoundsError(int(row[k]), int(col[k]), out.shape)
        convert = out._convert
        out._store.update(
            (int(r), int(c), convert(v)) for r, c, v in zip(row, col, data)
        )
        return out

    def copy(self):
        out = type(self)(self._nrows, self._ncols, dtype=self._dtype)
        out._store = self._store.copy(position=out._position)
        return out

    # ---------- Accessors ----------

    @property
    def nrows(self):
        return self._nrows

    @property
    def ncols(self):
        return self._ncols

    @property
    def shape(self):
        return (self._nrows, self._ncols)

    @property
    def nnz(self):
        """Number of stored non-zero entries (int)."""
        return len(self._store)

    @property
    def dtype(self):
        return self._dtype

    @property
    def zero(self):
        return self._zero

    def _position(self, row, col):
        return row * self._ncols + col

    def _convert(self, value):
        converted = self._dtype(value)
        if not isinstance(converted, (float, complex, np.inexact)) and converted != value:
            raise ValueError(
                f"{value!r} cannot be stored as {getattr(self._dtype, '__name__', self._dtype)} "
                f"without changing its value"
            )
        return converted

    def _check_index(self, row, col):
        row = operator.index(row)
        col = operator.index(col)
        if not (0 <= row < self._nrows and 0 <= col < self._ncols):
            raise OutOfBoundsError(row, col, self.shape)
        return row, col

    # ---------- Element operations ----------

    def element_at(self, row, col):
        """Value at ``(row, col)``, or the zero value if nothing is stored.

        Raises
        ------
        OutOfBoundsError
            If the indices are outside the matrix (negative included).
        """
        row, col = self._check_index(row, col)
        return self._store.get(row, col)

    def set_element(self, row, col, value):
        """Store ``value`` at ``(row, col)``.

        Assigning the zero value removes any stored entry instead.

        Raises
        ------
        OutOfBoundsError
            If the indices are outside the matrix.
        ValueError
            If converting ``value`` to the element type would change it.
        """
        row, col = self._check_index(row, col)
        self._store.set(row, col, self._convert(value))

    def remove_element(self, row, col):
        """Remove the entry at ``(row, col)``.

        Returns
        -------
        bool
            True if an entry was stored there.

        Raises
        ------
        OutOfBoundsError
            If the indices are outside the matrix.
        """
        row, col = self._check_index(row, col)
        return self._store.remove(row, col)

    @staticmethod
    def _split_key(key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("index must be a (row, col) pair")
        return key

    def __getitem__(self, key):
        row, col = self._split_key(key)
        return self.element_at(row, col)

    def __setitem__(self, key, value):
        row, col = self._split_key(key)
        self.set_element(row, col, value)

    def __delitem__(self, key):
        row, col = self._split_key(key)
        self.remove_element(row, col)

    def __contains__(self, key):
        row, col = self._split_key(key)
        if not (0 <= row < self._nrows and 0 <= col < self._ncols):
            return False
        return self._store.find(row, col) is not None

    def __iter__(self):
        """Stored records in row-major order."""
        return iter(self._store)

    def items(self):
        """Yield ``((row, col), value)`` for every stored entry in row-major order."""
        for elem in self._store:
            yield (elem.row, elem.col), elem.value

    # ---------- Shape operations ----------

    def resize(self, nrows, ncols):
        """Grow the matrix to ``(nrows, ncols)``.

        Stored entries keep their ``(row, col)``. Positions are always derived
        from the current column count, so no re-sort is needed.

        Raises
        ------
        InvalidResizeError
            If either dimension would shrink, even when no stored entry
            would be lost.
        """
        nrows = operator.index(nrows)
        ncols = operator.index(ncols)
        if nrows < self._nrows or ncols < self._ncols:
            raise InvalidResizeError(self.shape, (nrows, ncols))
        logger.debug("resize %s -> %s", self.shape, (nrows, ncols))
        self._nrows = nrows
        self._ncols = ncols

    def transpose(self):
        """Transpose in place and return ``self``.

        Every record swaps its row and column, the dimensions swap, and the
        store is re-sorted by the new row-major position.
        """
        for elem in self._store:
            elem.transpose()
        self._nrows, self._ncols = self._ncols, self._nrows
        self._store.resort()
        logger.debug("transposed to %s with %d stored", self.shape, self.nnz)
        return self

    @property
    def T(self):
        """Transposed copy; the original is left unchanged."""
        return self.copy().transpose()

    # ---------- Multiplication ----------

    def multiply(self, other):
        """Sparse matrix product ``self @ other`` as a new matrix.

        Raises
        ------
        IncompatibleDimensionsError
            If ``self.ncols != other.nrows``.
        """
        return multiply(self, other)

    def __matmul__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return multiply(self, other)

    # ---------- Rendering and conversion ----------

    def _render_rows(self, sep):
        zero_text = str(self._zero)
        it = iter(self._store)
        elem = next(it, None)
        for i in range(self._nrows):
            cells = []
            for j in range(self._ncols):
                if elem is not None and elem.row == i and elem.col == j:
                    cells.append(str(elem.value))
                    elem = next(it, None)
                else:
                    cells.append(zero_text)
            yield sep.join(cells)

    def to_string(self, sep=None):
        """Dense-equivalent text grid.

        Cells are joined by ``sep`` (default from
        :func:`llsparse.get_print_options`), rows by newlines. Unstored cells
        show the zero value.
        """
        if sep is None:
            sep = get_print_options()["sep"]
        return "\n".join(self._render_rows(sep))

    def print(self, file=None, sep=None):
        """Write the dense-equivalent grid to ``file`` (default: stdout)."""
        if file is None:
            file = sys.stdout
        if sep is None:
            sep = get_print_options()["sep"]
        for line in self._render_rows(sep):
            file.write(line + "\n")

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        name = getattr(self._dtype, "__name__", repr(self._dtype))
        return f"SparseMatrix(shape={self.shape}, nnz={self.nnz}, dtype={name})"

    def _numpy_dtype(self):
        if isinstance(self._dtype, type) and issubclass(
            self._dtype, (np.generic, bool, int, float, complex)
        ):
            return np.dtype(self._dtype)
        return np.dtype(object)

    def toarray(self):
        """Convert to a dense NumPy ``ndarray`` of shape ``(nrows, ncols)``."""
        out = np.full(self.shape, self._zero, dtype=self._numpy_dtype())
        for elem in self._store:
            out[elem.row, elem.col] = elem.value
        return out

    def to_arrays(self):
        """Return ``(row, col, data)`` NumPy arrays in row-major order."""
        n = len(self._store)
        row = np.fromiter((e.row for e in self._store), dtype=np.int64, count=n)
        col = np.fromiter((e.col for e in self._store), dtype=np.int64, count=n)
        data = np.array([e.value for e in self._store], dtype=self._numpy_dtype())
        return row, col, data

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        if self.shape != other.shape or self.nnz != other.nnz:
            return False
        return all(a == b for a, b in zip(self._store, other._store))

    __hash__ = None
