"""Ordered storage of non-zero element records.

:class:`ElementStore` keeps :class:`~llsparse.sparse.element.Element` records
in a Python list sorted strictly ascending by row-major position. The position
function is injected by the owning matrix and is evaluated on every lookup, so
positions always reflect the matrix's current column count and never go stale
after a resize.
"""

import logging
from bisect import bisect_left

from .._runtime import get_debug_checks
from ..errors import InvariantError
from .element import Element
from .sorting import is_sorted, merge, sort_elements

logger = logging.getLogger(__name__)


class ElementStore:
    """Sorted sequence of non-zero element records.

    Parameters
    ----------
    position : callable
        ``position(row, col) -> int``, the row-major linear index used as the
        sole ordering key.
    zero : Any
        Zero value of the element type. Values equal to it are never stored.

    Notes
    -----
    Bounds are not checked here; the owning matrix validates indices before
    delegating.
    """

    def __init__(self, position, zero):
        self._position = position
        self._zero = zero
        self._elements = []

    def _key(self, elem):
        return self._position(elem.row, elem.col)

    def _is_zero(self, value):
        return bool(value == self._zero)

    def _locate(self, row, col):
        """Return ``(index, found)`` for the record at ``(row, col)``."""
        pos = self._position(row, col)
        idx = bisect_left(self._elements, pos, key=self._key)
        found = idx < len(self._elements) and self._key(self._elements[idx]) == pos
        return idx, found

    def _after_mutation(self):
        if get_debug_checks():
            self.check()

    @property
    def zero(self):
        return self._zero

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __getitem__(self, index):
        return self._elements[index]

    def find(self, row, col):
        """Return the record at ``(row, col)`` or ``None``."""
        idx, found = self._locate(row, col)
        return self._elements[idx] if found else None

    def get(self, row, col):
        """Return the stored value at ``(row, col)`` or the zero value."""
        elem = self.find(row, col)
        return self._zero if elem is None else elem.value

    def set(self, row, col, value):
        """Store ``value`` at ``(row, col)``.

        A zero value removes any existing record instead of inserting. An
        existing record is overwritten in place; otherwise a new record is
        inserted before the first record with a larger position.
        """
        if self._is_zero(value):
            self.remove(row, col)
            return
        idx, found = self._locate(row, col)
        if found:
            self._elements[idx].value = value
        else:
            self._elements.insert(idx, Element(row, col, value))
        self._after_mutation()

    def remove(self, row, col):
        """Delete the record at ``(row, col)``; return whether one existed."""
        idx, found = self._locate(row, col)
        if not found:
            return False
        del self._elements[idx]
        self._after_mutation()
        return True

    def update(self, triples):
        """Set many ``(row, col, value)`` triples in one merge pass.

        Later triples win over earlier ones and over stored records. Zero
        values delete.
        """
        batch = {}
        for row, col, value in triples:
            batch[self._position(row, col)] = Element(row, col, value)
        if not batch:
            return
        incoming = sort_elements(batch.values(), self._key)
        merged = []
        last = None
        # incoming is the left operand so it wins on equal positions
        for elem in merge(incoming, self._elements, self._key):
            pos = self._key(elem)
            if pos == last:
                continue
            last = pos
            if not self._is_zero(elem.value):
                merged.append(elem)
        logger.debug(
            "bulk update: %d incoming, %d -> %d stored",
            len(incoming),
            len(self._elements),
            len(merged),
        )
        self._elements = merged
        self._after_mutation()

    def row_span(self, row):
        """Return ``(start, stop)`` indices of the records stored in ``row``."""
        start = bisect_left(self._elements, self._position(row, 0), key=self._key)
        stop = bisect_left(
            self._elements, self._position(row + 1, 0), lo=start, key=self._key
        )
        return start, stop

    def resort(self):
        """Restore ascending position order after indices were rewritten."""
        self._elements = sort_elements(self._elements, self._key)
        self._after_mutation()

    def clear(self):
        self._elements = []

    def copy(self, position=None):
        """Deep copy of the records, optionally bound to another position function."""
        out = ElementStore(self._position if position is None else position, self._zero)
        out._elements = [elem.copy() for elem in self._elements]
        return out

    def check(self):
        """Raise :class:`InvariantError` if order or zero suppression is broken."""
        if not is_sorted(self._elements, self._key, strict=True):
            raise InvariantError("element positions are not strictly increasing")
        for elem in self._elements:
            if self._is_zero(elem.value):
                raise InvariantError(f"explicit zero stored at ({elem.row}, {elem.col})")
