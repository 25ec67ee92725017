#!/usr/bin/env python3
"""Benchmark search: latency (p50, p95, p99) and QPS against a running service.

Usage:
  editrag serve &
  export API_URL=http://localhost:8000
  python scripts/bench_search.py [--num-docs 200] [--num-queries 100]

Documents are sent in batches of the service's max_source_documents, since
larger batches are truncated server-side.
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx


def synthetic_document(i: int) -> dict:
    body = "\n".join(
        f"def handler_{i}_{j}(request):\n    return process(request, step={j})"
        for j in range(20)
    )
    return {"path": f"/bench/module_{i}.py", "text": body, "language_id": "python"}


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark search")
    parser.add_argument("--num-docs", type=int, default=200, help="Documents to index before search")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of search requests")
    parser.add_argument("--output", type=str, default="bench_search.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    with httpx.Client(timeout=60.0) as client:
        r = client.get(f"{api_url}/v1/config")
        r.raise_for_status()
        batch_size = r.json()["max_source_documents"]

        print(f"Indexing {args.num_docs} documents in batches of {batch_size}...")
        indexed = 0
        for start in range(0, args.num_docs, batch_size):
            batch = [
                synthetic_document(i)
                for i in range(start, min(start + batch_size, args.num_docs))
            ]
            r = client.post(f"{api_url}/v1/documents", json={"documents": batch})
            r.raise_for_status()
            indexed = r.json()["total_chunks"]
        print(f"Index holds {indexed} chunks")

    latencies: list[float] = []
    errors = 0
    print(f"Running {args.num_queries} search requests...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=30.0) as client:
        for q in range(args.num_queries):
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/v1/search",
                json={"query": f"def handler_{q % max(args.num_docs, 1)}_3(request)"},
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful searches.")
        return 1

    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Search benchmark (index size={indexed} chunks, queries={n}, errors={errors})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
