"""
Bounded execution of independent per-item queries.

Items run sequentially when ``concurrency`` is 1. Otherwise a thread pool with
at most ``concurrency`` workers shares the engine's connection pool. Tasks are
expected to handle their own per-item failures; anything they raise aborts the
whole batch.

On an interrupt, queued items are cancelled and never start. Queries already
running in worker threads cannot be cancelled from here: the process exits
only after they return, bounded by the statement timeout when one is set.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Hashable, Iterable, Tuple, TypeVar

from pgtables.common.logger import get_logger

logger = get_logger("runner")

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")
R = TypeVar("R")


def run_bounded(
    items: Iterable[Tuple[K, T]],
    task: Callable[[T], R],
    concurrency: int = 1,
) -> Dict[K, R]:
    """Runs ``task`` over keyed items and returns results keyed the same way.

    Args:
        items: (key, item) pairs. Keys must be unique.
        task: Function applied to each item.
        concurrency: Max number of tasks in flight.

    Returns:
        Dict[K, R]: One result per key.
    """
    pairs = list(items)
    results: Dict[K, R] = {}

    if concurrency <= 1 or len(pairs) <= 1:
        for key, item in pairs:
            results[key] = task(item)
        return results

    workers = min(concurrency, len(pairs))
    logger.debug(f"Running {len(pairs)} queries with {workers} workers")
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pgtables")
    try:
        futures = {executor.submit(task, item): key for key, item in pairs}
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    except BaseException:
        # Interrupts and task crashes: drop queued work, do not wait on it
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
    return results
