"""
Batch allocation processing.

Independent allocation requests (e.g. one per ticker) share no allocation
state and are fanned out across a thread pool. Calls into the numerical
libraries are serialized by ``nalufx.utils.concurrency.model_lock``. A request
that fails validation is reported in the batch result and never aborts the
other requests.
"""

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Set

import numpy as np
from tqdm import tqdm

from ..config.allocation import BatchConfig
from .engine import AllocationEngine

logger = logging.getLogger(__name__)


@dataclass
class AllocationRequest:
    """Inputs of one allocation computation."""

    daily_returns: Sequence[float]
    cash_flows: Sequence[float]
    market_indices: Sequence[float]
    fund_characteristics: Sequence[float]
    num_days: int


@dataclass
class BatchResult:
    """Outcome of a batch of allocation requests."""

    allocations: Dict[str, np.ndarray] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def total_processed(self) -> int:
        return len(self.allocations) + len(self.failures)

    @property
    def success_rate(self) -> float:
        total = self.total_processed
        return len(self.allocations) / total if total else 0.0


class BatchAllocator:
    """
    Runs many allocation requests in parallel with one shared engine.

    ``timeout_per_request`` is measured from the moment a request starts
    running on a worker, not from submission, so requests queued behind
    slow ones get their full budget. A timed-out computation is reported as
    failed but its worker thread runs to completion.
    """

    def __init__(
        self,
        engine: Optional[AllocationEngine] = None,
        config: Optional[BatchConfig] = None,
    ):
        """
        Initialize batch allocator.

        Args:
            engine: AllocationEngine used for every request. Default engine if None.
            config: BatchConfig. Uses defaults if None.
        """
        self.engine = engine or AllocationEngine()
        self.config = config or BatchConfig()

    def process(self, requests: Mapping[str, AllocationRequest]) -> BatchResult:
        """
        Compute allocations for all requests.

        Args:
            requests: Mapping from request key (e.g. ticker) to request

        Returns:
            BatchResult with allocations and failure messages by key
        """
        result = BatchResult()
        if not requests:
            return result

        logger.info(f"Processing {len(requests)} allocation requests with {self.config.max_workers} workers")

        timeout = self.config.timeout_per_request
        started: Dict[str, float] = {}
        progress = tqdm(total=len(requests), desc="Allocating", leave=False, disable=not self.config.verbose)

        executor = ThreadPoolExecutor(max_workers=self.config.max_workers)
        try:
            future_to_key = {
                executor.submit(self._process_single, key, request, started): key
                for key, request in requests.items()
            }
            pending = set(future_to_key)

            while pending:
                done, pending = wait(
                    pending, timeout=self._next_wakeup(pending, future_to_key, started),
                    return_when=FIRST_COMPLETED,
                )

                for future in done:
                    key = future_to_key[future]
                    try:
                        result.allocations[key] = future.result()
                    except Exception as e:
                        result.failures[key] = str(e)
                        logger.warning(f"Allocation for {key} failed: {e}")
                    progress.update(1)

                if timeout is None:
                    continue

                now = time.monotonic()
                for future in list(pending):
                    key = future_to_key[future]
                    if key in started and now - started[key] >= timeout:
                        pending.discard(future)
                        result.failures[key] = f"timed out after {timeout}s"
                        logger.warning(f"Allocation for {key} timed out")
                        progress.update(1)
        finally:
            progress.close()
            # timed-out workers keep running in the background
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info(
            f"Batch complete: {len(result.allocations)} successful, "
            f"{len(result.failures)} failed"
        )
        return result

    def _next_wakeup(
        self, pending: Set[Future], future_to_key: Dict[Future, str], started: Dict[str, float]
    ) -> Optional[float]:
        """Seconds until the earliest running request exceeds its timeout."""
        timeout = self.config.timeout_per_request
        if timeout is None:
            return None

        now = time.monotonic()
        remaining = [
            started[future_to_key[future]] + timeout - now
            for future in pending
            if future_to_key[future] in started
        ]
        # Nothing running yet: re-check once a full timeout has elapsed
        return max(0.0, min(remaining)) if remaining else timeout

    def _process_single(
        self, key: str, request: AllocationRequest, started: Dict[str, float]
    ) -> np.ndarray:
        started[key] = time.monotonic()
        return self.engine.compute_allocation(
            request.daily_returns,
            request.cash_flows,
            request.market_indices,
            request.fund_characteristics,
            request.num_days,
        )
