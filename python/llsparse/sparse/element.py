"""Element record stored by :class:`llsparse.sparse.store.ElementStore`."""


class Element:
    """A single non-zero entry ``(row, col, value)``.

    Parameters
    ----------
    row : int
        Row index, non-negative.
    col : int
        Column index, non-negative.
    value : Any
        Non-zero value of the owning matrix's dtype.

    Notes
    -----
    Only the value is meant to be assigned after construction. The indices
    change only through :meth:`transpose`, which the owning matrix calls for
    every record at once before re-sorting.
    """

    __slots__ = ("row", "col", "value")

    def __init__(self, row, col, value):
        self.row = row
        self.col = col
        self.value = value

    def transpose(self):
        """Swap ``row`` and ``col`` in place."""
        self.row, self.col = self.col, self.row

    def as_tuple(self):
        return (self.row, self.col, self.value)

    def copy(self):
        return Element(self.row, self.col, self.value)

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    __hash__ = None

    def __repr__(self):
        return f"Element(row={self.row}, col={self.col}, value={self.value!r})"
