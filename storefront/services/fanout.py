"""
Concurrent fan-out for independent report queries.

Each query runs on a thread pool worker inside its own context (the Flask
app context in production, so every worker gets its own scoped session).
Results are joined before the report is composed. The first failure cancels
whatever has not started and aborts the whole fan-out.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait
from contextlib import nullcontext
from typing import Any, Callable, Dict

from ..utils.exceptions import AnalyticsQueryError

logger = logging.getLogger(__name__)


class QueryFanOut:
    """
    Usage:
        fanout = QueryFanOut(max_workers=8, context_factory=app.app_context)
        results = fanout.run({
            'orders': lambda: store.count_orders(window),
            'revenue': lambda: store.sum_order_totals(window, 'PAID'),
        })
    """

    def __init__(self, max_workers: int = 8, context_factory: Callable[[], Any] = None):
        self.max_workers = max(1, int(max_workers))
        self.context_factory = context_factory or nullcontext

    def _call(self, fn: Callable[[], Any]) -> Any:
        with self.context_factory():
            return fn()

    def run(self, tasks: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
        """
        Run every task concurrently and return results by task name.

        Raises:
            AnalyticsQueryError: naming the first task that failed
        """
        if not tasks:
            return {}

        pool = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(tasks)),
            thread_name_prefix='analytics'
        )
        try:
            futures = {pool.submit(self._call, fn): name for name, fn in tasks.items()}
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)

            for future in done:
                error = future.exception()
                if error is not None:
                    name = futures[future]
                    logger.error(f"Analytics query '{name}' failed: {error}")
                    pool.shutdown(wait=True, cancel_futures=True)
                    raise AnalyticsQueryError(name, error) from error

            return {name: future.result() for future, name in futures.items()}
        finally:
            pool.shutdown(wait=True)
