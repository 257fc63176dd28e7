"""Stable merge sort and merge over sequences of element records.

Both helpers take an injected ``key`` so that the caller decides the ordering;
the element store passes its row-major position function.
"""


def merge(left, right, key):
    """Merge two ``key``-sorted iterables into one sorted stream.

    On equal keys the head of ``left`` is taken first, so the merge is stable
    and deterministic.

    Parameters
    ----------
    left, right : iterable
        Inputs, each already sorted ascending by ``key``.
    key : callable
        Maps an item to a comparable sort key.

    Yields
    ------
    Any
        Items of both inputs in ascending ``key`` order.
    """
    left = iter(left)
    right = iter(right)
    sentinel = object()
    a = next(left, sentinel)
    b = next(right, sentinel)
    if a is not sentinel:
        ka = key(a)
    if b is not sentinel:
        kb = key(b)
    while a is not sentinel and b is not sentinel:
        if kb < ka:
            yield b
            b = next(right, sentinel)
            if b is not sentinel:
                kb = key(b)
        else:
            yield a
            a = next(left, sentinel)
            if a is not sentinel:
                ka = key(a)
    if a is not sentinel:
        yield a
        yield from left
    if b is not sentinel:
        yield b
        yield from right


def sort_elements(elements, key):
    """Return a new list with ``elements`` sorted ascending by ``key``.

    Top-down merge sort: split at the index midpoint, sort each half, then
    :func:`merge` them. O(n log n) comparisons, stable.
    """
    items = list(elements)
    if len(items) <= 1:
        return items
    return _merge_sort(items, key)


def _merge_sort(items, key):
    if len(items) <= 1:
        return items
    mid = len(items) // 2
    left = _merge_sort(items[:mid], key)
    right = _merge_sort(items[mid:], key)
    return list(merge(left, right, key))


def is_sorted(elements, key, strict=True):
    """Check that ``elements`` are ascending by ``key``.

    With ``strict=True`` equal neighbouring keys are rejected too.
    """
    prev = None
    first = True
    for item in elements:
        k = key(item)
        if not first:
            if k < prev or (strict and k == prev):
                return False
        prev = k
        first = False
    return True


__all__ = ["merge", "sort_elements", "is_sorted"]
