"""Sparse-by-sparse matrix multiplication.

The product is computed by co-iterating the two operands' sorted record
streams. For each record ``(i, k, v)`` of the left operand, the contiguous run
of right-operand records in row ``k`` is located by seeking into its sorted
store, and every ``(k, j, w)`` in that run contributes ``v * w`` to the
accumulator entry ``(i, j)``. Neither operand is densified, transposed or
otherwise mutated.

Cost is O(nnz(A) * (log nnz(B) + r)) where ``r`` is the mean number of stored
records per row of B.
"""

import logging

from ..errors import IncompatibleDimensionsError

logger = logging.getLogger(__name__)


def multiply(a, b):
    """Return the sparse product ``a @ b`` as a new matrix.

    Parameters
    ----------
    a : SparseMatrix
        Left operand, shape ``(m, n)``.
    b : SparseMatrix
        Right operand, shape ``(n, p)``.

    Returns
    -------
    SparseMatrix
        New matrix of shape ``(m, p)`` with the common element type. Entries whose
        partial products cancel to zero are not stored.

    Raises
    ------
    IncompatibleDimensionsError
        If ``a.ncols != b.nrows``.
    TypeError
        If the operands have different element types.
    """
    if a.ncols != b.nrows:
        raise IncompatibleDimensionsError(a.shape, b.shape)
    if a.dtype is not b.dtype:
        raise TypeError(
            f"operands must share an element type, got {a.dtype!r} and {b.dtype!r}"
        )

    result = type(a)(a.nrows, b.ncols, dtype=a.dtype)
    if a.nnz == 0 or b.nnz == 0:
        return result

    zero = result.zero
    right = b._store
    acc = {}
    for left in a._store:
        start, stop = right.row_span(left.col)
        for idx in range(start, stop):
            elem = right[idx]
            key = (left.row, elem.col)
            acc[key] = acc.get(key, zero) + left.value * elem.value

    for (i, j), value in sorted(acc.items()):
        result.set_element(i, j, value)

    logger.debug(
        "multiply %s (nnz=%d) @ %s (nnz=%d) -> nnz=%d",
        a.shape,
        a.nnz,
        b.shape,
        b.nnz,
        result.nnz,
    )
    return result
