"""Bounded-concurrency batch fetching with per-endpoint retry."""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable

from api_types_gen.errors import FetchError
from api_types_gen.notify import Notifier, NullNotifier
from api_types_gen.spec.base import EndpointSpec, FetchOutcome

logger = logging.getLogger(__name__)

FetchFn = Callable[[EndpointSpec], str]

WORKERS_PER_SLOT = 4


class BatchScheduler:
    """Runs a fetch function over many endpoint specs.

    Every spec gets its own retry loop. A semaphore bounds the number of
    fetches in flight to ``concurrency``; a spec waiting out its retry delay
    does not hold a slot, so it never blocks another spec from starting.
    """

    def __init__(
        self,
        fetch: FetchFn,
        concurrency: int = 3,
        retries: int = 2,
        retry_delay_ms: int = 1000,
        notifier: Notifier | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if retries < 0:
            raise ValueError("retries must not be negative")
        self.fetch = fetch
        self.concurrency = concurrency
        self.retries = retries
        self.retry_delay_ms = retry_delay_ms
        self.notifier = notifier or NullNotifier()
        self._sleep = sleep
        self._slots = threading.BoundedSemaphore(concurrency)

    def run_all(self, specs: list[EndpointSpec]) -> list[FetchOutcome]:
        """Fetch every spec and return exactly one outcome per spec, in input order."""
        if not specs:
            return []

        futures: dict[Future, int] = {}
        # The semaphore, not the pool, bounds in-flight fetches; extra workers
        # cover specs sleeping through a retry delay.
        max_workers = min(len(specs), self.concurrency * WORKERS_PER_SLOT)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for index, spec in enumerate(specs):
                futures[executor.submit(self._run_one, spec)] = index
            wait(futures.keys())

        outcomes: list[FetchOutcome | None] = [None] * len(specs)
        for future, index in futures.items():
            outcomes[index] = future.result()
        return outcomes

    def _run_one(self, spec: EndpointSpec) -> FetchOutcome:
        remaining = self.retries
        attempt = 1
        while True:
            try:
                with self._slots:
                    payload = self.fetch(spec)
                return FetchOutcome.succeeded(spec, payload)
            except FetchError as e:
                error = str(e)
            except Exception as e:  # pylint: disable=broad-exception-caught
                error = f"{spec.name} fetch failed: {e}"

            if remaining <= 0:
                logger.debug("%s failed after %d attempt(s): %s", spec.name, attempt, error)
                return FetchOutcome.failed(spec, error)

            self.notifier.warning(f"{error} (retrying, {remaining} left)")
            logger.debug("%s attempt %d failed, retrying in %dms", spec.name, attempt, self.retry_delay_ms)
            self._sleep(self.retry_delay_ms / 1000)
            remaining -= 1
            attempt += 1
