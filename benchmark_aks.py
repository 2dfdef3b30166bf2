"""
Benchmark and validate the AKS primality test.

Outputs
=======
* A LaTeX runtime table (figures/performance_table.tex)
* A log-log runtime plot (figures/performance_scaling.pdf|png)
* A plot of the AKS parameters r and the witness bound against n (figures/aks_parameters.pdf|png)
* A verification report against sympy.isprime on stdout
"""

from __future__ import annotations

import math
import signal
import time
import warnings
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from sympy import isprime, nextprime

from number_theory import trial_division
from primality_test import AKSPrimalityTest

Algorithm = Callable[[int], bool]


class TimeoutException(Exception):
    """Exception raised when a function execution times out."""
    pass


def timeout_handler(signum, frame):
    """Handler for SIGALRM signal."""
    raise TimeoutException()


def run_with_timeout(func, args, timeout_seconds=300):
    """
    Run a function with a timeout.
    Returns (result, execution_time) or (None, float('inf')) if timeout occurs.
    """
    signal.signal(signal.SIGALRM, timeout_handler)
    signal.alarm(timeout_seconds)

    start_time = time.perf_counter()
    try:
        result = func(*args)
        execution_time = time.perf_counter() - start_time
        return result, execution_time
    except TimeoutException:
        return None, float('inf')
    finally:
        # Disable the alarm
        signal.alarm(0)


def algorithms() -> Tuple[List[Algorithm], List[str]]:
    aks = AKSPrimalityTest()
    return [trial_division, aks.is_prime], ["Trial Div.", "AKS"]


# ----------------------------------------------------------------------------
# 1.  Benchmark driver
# ----------------------------------------------------------------------------

def run_benchmarks(test_numbers: List[int],
                   repetitions: int = 3,
                   timeout_secs: int = 300) -> Dict[str, Dict[int, float]]:
    """
    Time every algorithm on every n, averaging the finished runs.
    Runs that hit the timeout count as infinite.
    """
    methods, method_names = algorithms()
    all_times: Dict[str, Dict[int, List[float]]] = {
        name: {n: [] for n in test_numbers} for name in method_names
    }

    for rep in range(1, repetitions + 1):
        print(f"Repetition {rep}/{repetitions}")
        for n in test_numbers:
            print(f"  n = {n}")
            for method, name in zip(methods, method_names):
                result, elapsed = run_with_timeout(method, [n], timeout_secs)
                all_times[name][n].append(elapsed)
                if result is None:
                    print(f"    {name}: timed out after {timeout_secs}s")
                else:
                    print(f"    {name}: {elapsed:.6g}s - Result: {result}")

    avg_times: Dict[str, Dict[int, float]] = {name: {} for name in method_names}
    for name in method_names:
        for n in test_numbers:
            finished = np.array([t for t in all_times[name][n] if math.isfinite(t)])
            avg_times[name][n] = float(finished.mean()) if finished.size else float("inf")

    return avg_times


# ----------------------------------------------------------------------------
# 2.  LaTeX table
# ----------------------------------------------------------------------------

def scientific(val: float) -> str:
    """Return a LaTeX-friendly scientific-notation string."""
    if val == float("inf") or math.isnan(val):
        return "$\\infty$"
    exponent = int(math.floor(math.log10(abs(val)))) if val else 0
    mantissa = val / (10 ** exponent) if val else 0
    return f"${mantissa:.2f} \\times 10^{{{exponent}}}$"


def create_latex_table(results: Dict[str, Dict[int, float]],
                       method_names: List[str],
                       test_numbers: List[int],
                       repetitions: int) -> str:
    """Return a LaTeX tabular of mean runtimes, fastest entry per column in bold."""
    magnitudes = [int(math.log10(n)) if n > 0 else 0 for n in test_numbers]

    fastest = {}
    for n in test_numbers:
        finite_times = [(name, results[name].get(n, float("inf"))) for name in method_names]
        finite_times = [(name, t) for name, t in finite_times if math.isfinite(t)]
        fastest[n] = min(finite_times, key=lambda p: p[1])[0] if finite_times else None

    table = ["\\begin{table}[h]", "\\centering", "\\small"]
    table.append("\\begin{tabular}{|l|" + "c|" * len(test_numbers) + "}")
    table.append("\\hline")

    header = ["\\textbf{Method}"] + [f"$\\mathbf{{n\\approx10^{{{m}}}}}$" for m in magnitudes]
    table.append(" & ".join(header) + " \\\\")
    table.append("\\hline")

    for name in method_names:
        row = [name]
        for n in test_numbers:
            cell = scientific(results[name].get(n, float("inf")))
            if fastest[n] == name:
                cell = "$\\mathbf{" + cell.strip("$") + "}$"
            row.append(cell)
        table.append(" & ".join(row) + " \\\\")
    table.append("\\hline\n\\end{tabular}")

    caption = (
        f"Runtime of deterministic primality tests (mean of {repetitions} runs). "
        "Bold entries mark the fastest observed time."
    )
    table.append(f"\\caption{{{caption}}}")
    table.append("\\label{tab:performance}")
    table.append("\\end{table}")
    return "\n".join(table)


# ----------------------------------------------------------------------------
# 3.  Plots
# ----------------------------------------------------------------------------

def create_performance_plot(results: Dict[str, Dict[int, float]],
                            method_names: List[str],
                            out_dir: Path) -> None:
    """Save a log-log runtime plot as PDF and PNG."""
    out_dir.mkdir(parents=True, exist_ok=True)
    plt.figure(dpi=300, figsize=(10, 6))
    markers = ["o", "s", "^", "d"]
    for idx, name in enumerate(method_names):
        points = [(n, t) for n, t in results[name].items() if math.isfinite(t) and t > 0]
        if not points:
            continue
        xs, ys = zip(*points)
        plt.loglog(xs, ys, label=name, marker=markers[idx % len(markers)], linewidth=2)
    plt.grid(True, which="both", ls="--", alpha=0.6)
    plt.xlabel("Input size $n$ (log scale)")
    plt.ylabel("Execution time (s, log scale)")
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_dir / "performance_scaling.pdf")
    plt.savefig(out_dir / "performance_scaling.png")
    plt.close()


def aks_parameters(n_values: List[int]) -> Dict[str, np.ndarray]:
    """r and the polynomial witness bound for each n > 1."""
    tester = AKSPrimalityTest()
    ns, rs, bounds = [], [], []
    for n in n_values:
        if n <= 1:
            continue
        r = tester.find_order_parameter(n)
        ns.append(n)
        rs.append(r)
        bounds.append(tester.witness_bound(n, r))
    return {"n": np.array(ns), "r": np.array(rs), "bound": np.array(bounds)}


def create_parameter_plot(n_values: List[int], out_dir: Path) -> None:
    """Plot r and the witness bound against n alongside log2(n)^2."""
    out_dir.mkdir(parents=True, exist_ok=True)
    params = aks_parameters(n_values)

    fig, ax = plt.subplots(figsize=(10, 6), dpi=300)
    ax.plot(params["n"], params["r"], label="$r$", linewidth=1.5)
    ax.plot(params["n"], params["bound"], label="$\\lfloor\\sqrt{\\varphi(r)}\\log_2 n\\rfloor$", linewidth=1.5)
    ax.plot(params["n"], np.log2(params["n"]) ** 2, "--", label="$\\log_2^2 n$", alpha=0.7)
    ax.grid(True, ls="--", alpha=0.6)
    ax.set_xlabel("$n$")
    ax.set_ylabel("Parameter value")
    ax.set_title("AKS parameters")
    ax.legend()

    plt.tight_layout()
    plt.savefig(out_dir / "aks_parameters.pdf")
    plt.savefig(out_dir / "aks_parameters.png")
    plt.close(fig)


# ----------------------------------------------------------------------------
# 4.  Verification
# ----------------------------------------------------------------------------

def verify_against_reference(max_n: int = 500) -> List[Tuple[int, bool, bool]]:
    """
    Compare AKS with sympy.isprime for every n in [2, max_n].
    Returns the disagreements as (n, aks_result, reference_result).
    """
    tester = AKSPrimalityTest()
    disagreements = []

    for n in range(2, max_n + 1):
        result = tester.is_prime(n)
        reference = bool(isprime(n))
        if result != reference:
            warnings.warn(f"AKS returned {result} for n={n}, sympy says {reference}")
            disagreements.append((n, result, reference))

    print("\nVerification Results:")
    if disagreements:
        print(f"Found {len(disagreements)} disagreements:")
        for n, result, reference in disagreements:
            print(f"  n = {n}: AKS returned {result}, but sympy says {reference}")
    else:
        print("AKS agrees with sympy for numbers 2 to", max_n)

    return disagreements


# ----------------------------------------------------------------------------
# 5.  Main entry point
# ----------------------------------------------------------------------------

def main() -> None:
    figures = Path("figures")

    print("Verifying the AKS implementation...")
    if verify_against_reference(500):
        print("\nCannot run benchmarks due to disagreements with the reference.")
        return

    # use the next prime >= n so every run goes through the polynomial gate
    bases = np.logspace(2, 5, num=7, base=10, dtype=int).tolist()
    test_numbers = [int(nextprime(n - 1)) for n in bases]
    repetitions = 3

    print(f"\nBenchmarking {len(test_numbers)} primes from {test_numbers[0]} to {test_numbers[-1]} ...")
    results = run_benchmarks(test_numbers, repetitions=repetitions, timeout_secs=300)
    method_names = list(results.keys())

    table = create_latex_table(results, method_names, test_numbers, repetitions)
    figures.mkdir(parents=True, exist_ok=True)
    (figures / "performance_table.tex").write_text(table)
    print("\nPerformance Table:")
    print(table)

    create_performance_plot(results, method_names, figures)
    create_parameter_plot(list(range(2, 2001)), figures)

    print(f"\nAll artifacts written to {figures.resolve()}")


if __name__ == "__main__":
    main()
