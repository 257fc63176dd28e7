import io

from llsparse import SparseMatrix, set_print_options


def make_square():
    m = SparseMatrix(2, 2)
    m.set_element(0, 0, 1.0)
    m.set_element(0, 1, 1.0)
    m.set_element(1, 0, 2.0)
    m.set_element(1, 1, 2.0)
    return m


def test_print_full_matrix():
    buf = io.StringIO()
    make_square().print(buf)
    assert [float(tok) for tok in buf.getvalue().split()] == [1.0, 1.0, 2.0, 2.0]


def test_print_writes_one_line_per_row():
    m = SparseMatrix(3, 2, dtype=int)
    m[1, 1] = 7
    buf = io.StringIO()
    m.print(file=buf)
    assert buf.getvalue() == "0 0\n0 7\n0 0\n"


def test_to_string_fills_zero_cells():
    m = SparseMatrix(2, 3, dtype=int)
    m[0, 2] = 5
    m[1, 0] = -1
    assert m.to_string() == "0 0 5\n-1 0 0"
    assert str(m) == m.to_string()


def test_to_string_float_zero():
    m = SparseMatrix(1, 2)
    m[0, 1] = 2.5
    assert str(m) == "0.0 2.5"


def test_to_string_after_resize_and_transpose():
    m = SparseMatrix(1, 2, dtype=int)
    m[0, 0] = 1
    m[0, 1] = 2
    m.resize(2, 3)
    m[1, 2] = 3
    assert m.to_string() == "1 2 0\n0 0 3"
    m.transpose()
    assert m.to_string() == "1 0\n2 0\n0 3"


def test_custom_separator():
    m = SparseMatrix(1, 3, dtype=int)
    m[0, 1] = 4
    assert m.to_string(sep=",") == "0,4,0"
    set_print_options(sep="\t")
    assert m.to_string() == "0\t4\t0"
    buf = io.StringIO()
    m.print(buf)
    assert buf.getvalue() == "0\t4\t0\n"


def test_empty_matrix_prints_nothing():
    buf = io.StringIO()
    SparseMatrix().print(buf)
    assert buf.getvalue() == ""
    assert SparseMatrix().to_string() == ""
