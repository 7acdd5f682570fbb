"""Simple benchmarking harness for levelog.

Measures emission throughput (records/sec) and approximate memory growth
while writing records to an in-memory sink, optionally from several threads.
Keeps dependencies minimal; for deeper profiling integrate with py-spy or
scalene externally.
"""
from __future__ import annotations

import argparse
import io
import threading
import time
import tracemalloc

from levelog import Logger, Options


def run(records: int, threads: int) -> None:
    logger = Logger()
    sink = io.BytesIO()
    logger.configure(Options(output=sink))
    per_thread = max(1, records // threads)

    def worker(tid: int) -> None:
        for i in range(per_thread):
            logger.infof("worker=%d seq=%d payment declined code=402", tid, i)

    tracemalloc.start()
    start = time.perf_counter()
    workers = [threading.Thread(target=worker, args=(t,)) for t in range(threads)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    elapsed = time.perf_counter() - start
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    counted = per_thread * threads
    rps = counted / elapsed if elapsed else float("inf")
    print(f"Emitted {counted} records in {elapsed:.3f}s -> {rps:,.0f} records/sec ({threads} threads)")
    print(f"Current mem ~{current/1024/1024:.2f} MB; Peak mem ~{peak/1024/1024:.2f} MB")
    print(f"Sink bytes: {len(sink.getvalue())}  buffers allocated: {logger.pool.allocated}")


def main() -> int:
    ap = argparse.ArgumentParser(description="Benchmark levelog emission throughput")
    ap.add_argument("--records", type=int, default=100000, help="Total records to emit")
    ap.add_argument("--threads", type=int, default=1, help="Concurrent emitting threads")
    args = ap.parse_args()
    run(args.records, max(1, args.threads))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
