import argparse
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import scipy.sparse as sp

from llsparse import SparseMatrix

# ---------- Builders ----------


def build_scipy_coo(
    m: int, n: int, density: float, seed: int, dtype: np.dtype
) -> Tuple[sp.coo_matrix, int]:
    rs = np.random.RandomState(seed)
    data_rvs = lambda s: rs.standard_normal(s).astype(dtype)
    A_coo = sp.random(m, n, density=density, format="coo", random_state=rs, data_rvs=data_rvs)
    return A_coo, int(A_coo.nnz)


def build_llsparse_from_scipy(A_scipy: sp.coo_matrix) -> SparseMatrix:
    coo = A_scipy if sp.isspmatrix_coo(A_scipy) else A_scipy.tocoo()
    return SparseMatrix.from_arrays(
        coo.row, coo.col, coo.data, coo.shape, dtype=coo.data.dtype, check=False
    )


# ---------- Timing helpers ----------


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float]) -> Optional[Dict[str, float]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
    }


class Backend:
    SCIPY = "scipy"
    LLSPARSE = "llsparse"


def run_matmul_scipy(A: sp.csr_matrix, B: sp.csr_matrix) -> sp.csr_matrix:
    return A @ B


def run_matmul_llsparse(A: SparseMatrix, B: SparseMatrix) -> SparseMatrix:
    return A @ B


def run_transpose_scipy(A: sp.csr_matrix) -> sp.csr_matrix:
    return A.T.tocsr()


def run_transpose_llsparse(A: SparseMatrix) -> SparseMatrix:
    # transposing in place twice leaves A as it was
    return A.transpose().transpose()


# ---------- Main ----------


def main():
    p = argparse.ArgumentParser(description="Sparse-by-sparse matmul and transpose benchmarks")
    p.add_argument("--m", type=int, default=512)
    p.add_argument("--n", type=int, default=512)
    p.add_argument("--k", type=int, default=512, help="Inner dimension")
    p.add_argument("--density", type=float, default=0.01)
    p.add_argument("--dtype", type=str, default="float64", choices=["float32", "float64"])
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=3)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no_scipy", action="store_true")
    p.add_argument("--validate", action="store_true")
    p.add_argument(
        "--ops",
        type=str,
        default="all",
        help="Comma-separated ops: matmul, transpose",
    )

    args = p.parse_args()
    dtype = np.float64 if args.dtype == "float64" else np.float32

    A_scipy, nnzA = build_scipy_coo(args.m, args.k, args.density, args.seed, dtype)
    B_scipy, nnzB = build_scipy_coo(args.k, args.n, args.density, args.seed + 101, dtype)
    A_csr = A_scipy.tocsr()
    B_csr = B_scipy.tocsr()
    A = build_llsparse_from_scipy(A_scipy)
    B = build_llsparse_from_scipy(B_scipy)

    wanted = {op.strip().lower() for op in (args.ops.split(",") if args.ops else [])}
    if "all" in wanted or not wanted:
        wanted = {"matmul", "transpose"}

    results: List[Dict[str, float]] = []

    # ---- matmul ----
    if "matmul" in wanted:
        if not args.no_scipy:
            times = time_op(lambda: run_matmul_scipy(A_csr, B_csr), args.warmup, args.repeat)
            stats = summarize(Backend.SCIPY + ":matmul", times)
            if stats:
                results.append(stats)
        times = time_op(lambda: run_matmul_llsparse(A, B), args.warmup, args.repeat)
        stats = summarize(Backend.LLSPARSE + ":matmul", times)
        if stats:
            results.append(stats)
        if args.validate:
            ref = run_matmul_scipy(A_csr, B_csr).toarray()
            out = run_matmul_llsparse(A, B).toarray()
            rtol = 1e-4 if dtype == np.float32 else 1e-7
            atol = 1e-6 if dtype == np.float32 else 1e-9
            if not np.allclose(out, ref, rtol=rtol, atol=atol):
                raise AssertionError("Validation failed: llsparse matmul vs scipy")

    # ---- transpose ----
    if "transpose" in wanted:
        if not args.no_scipy:
            times = time_op(lambda: run_transpose_scipy(A_csr), args.warmup, args.repeat)
            stats = summarize(Backend.SCIPY + ":transpose", times)
            if stats:
                results.append(stats)
        times = time_op(lambda: run_transpose_llsparse(A), args.warmup, args.repeat)
        stats = summarize(Backend.LLSPARSE + ":transpose x2", times)
        if stats:
            results.append(stats)
        if args.validate and not np.allclose(A.toarray(), A_scipy.toarray()):
            raise AssertionError("Validation failed: double transpose changed llsparse matrix")

    # ---- print summary ----
    print(
        f"Matmul Benchmarks: m={args.m} k={args.k} n={args.n} density={args.density} "
        f"dtype={args.dtype} nnzA={nnzA} nnzB={nnzB}"
    )
    for r in results:
        if not r:
            continue
        print(
            f"{r['name']:>22}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms"
        )


if __name__ == "__main__":
    main()
