import sys
import os
import time
import numpy as np
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.formatting import format_difficulty
from src.stats import UserStats, WorkerStats, workers_frame

logging.basicConfig(level=logging.WARNING)

def generate_difficulties(n=100_000):
    np.random.seed(123)
    # Log-uniform over 1 .. 1e17 so every unit (and the fallback) is hit
    return (10 ** np.random.uniform(0, 17, n)).tolist()

def generate_user(n_workers=500):
    np.random.seed(456)
    workers = [
        WorkerStats(
            workername=f"bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq.rig{i}",
            bestshare=float(10 ** np.random.uniform(3, 12)),
            bestever=int(10 ** np.random.uniform(3, 14)),
            lastshare=1700000000 + i,
        )
        for i in range(n_workers)
    ]
    return UserStats(workers=n_workers, worker=workers)

def benchmark_format(n_values=100_000, n_loops=5):
    values = generate_difficulties(n_values)
    print(f"Benchmarking format_difficulty over {n_values} values ({n_loops} loops)...")

    times = []
    for _ in range(n_loops):
        start = time.perf_counter()
        for v in values:
            format_difficulty(v)
        times.append(time.perf_counter() - start)

    avg = np.mean(times)
    std = np.std(times)
    print(f"  Avg: {avg:.4f}s ± {std:.4f}s ({avg / n_values * 1e6:.2f}µs per call)")

def benchmark_workers_frame(n_workers=500, n_loops=10):
    user = generate_user(n_workers)
    print(f"Benchmarking workers_frame with {n_workers} workers ({n_loops} loops)...")

    times = []
    for _ in range(n_loops):
        start = time.perf_counter()
        workers_frame(user)
        times.append(time.perf_counter() - start)

    print(f"  Avg: {np.mean(times):.4f}s ± {np.std(times):.4f}s")

if __name__ == "__main__":
    print("=== Performance Benchmark ===")
    benchmark_format()
    benchmark_workers_frame()
