"""
Search coordination: worker sizing, process spawning, supervision and
result collection.
"""

import concurrent.futures
import logging
import multiprocessing as mp
import os
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional

import psutil

from vanity.core import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_FORMAT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REPORT_INTERVAL,
    InvalidConfigError,
    InvalidPrefixError,
    SearchAbortedError,
)
from vanity.keygen import KeygenMode
from vanity.progress import ProgressReporter
from vanity.publisher import SearchResult
from vanity.state import SearchState
from vanity.validation import calculate_expected_iterations, is_valid_base58_prefix
from vanity.worker import init_worker, search_worker

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for one vanity search."""
    prefix: str
    mode: KeygenMode = KeygenMode.MNEMONIC
    output_format: str = DEFAULT_FORMAT
    num_workers: Optional[int] = None
    batch_size: int = DEFAULT_BATCH_SIZE
    report_interval: float = DEFAULT_REPORT_INTERVAL
    output_dir: str = DEFAULT_OUTPUT_DIR
    show_progress: bool = True
    start_method: str = "spawn"


class SystemUtils:
    """Utility functions for system information."""

    @staticmethod
    def get_worker_count() -> int:
        """One worker per logical CPU."""
        return max(1, psutil.cpu_count(logical=True) or os.cpu_count() or 1)

    @staticmethod
    def get_system_resources() -> Dict[str, Any]:
        """Get current system resource usage."""
        try:
            memory = psutil.virtual_memory()
            disk = psutil.disk_usage(os.getcwd())
            return {
                'cpu_percent': psutil.cpu_percent(interval=None),
                'memory_percent': memory.percent,
                'memory_available': memory.available,
                'disk_percent': disk.percent,
                'disk_free': disk.free
            }
        except (psutil.Error, OSError) as e:
            logger.warning(f"Could not get system resources: {e}")
            return {}


class SearchCoordinator:
    """Runs one search to completion and returns the single winning result."""

    def __init__(self, config: SearchConfig):
        self.config = config
        self.num_workers = config.num_workers if config.num_workers is not None else SystemUtils.get_worker_count()
        self.expected_iterations = calculate_expected_iterations(config.prefix)
        self.start_time = None
        self.winners = 0

    def run(self) -> SearchResult:
        """Search until a worker matches.

        Raises:
            InvalidPrefixError: before anything is spawned, if the prefix is not Base58
            InvalidConfigError: before anything is spawned, if batch_size or num_workers is below 1
            SearchAbortedError: if any worker fails; the others are stopped first
        """
        prefix = self.config.prefix
        if not is_valid_base58_prefix(prefix):
            raise InvalidPrefixError(prefix)
        if self.config.batch_size < 1:
            raise InvalidConfigError(f"batch_size must be at least 1, got {self.config.batch_size}")
        if self.config.num_workers is not None and self.config.num_workers < 1:
            raise InvalidConfigError(f"num_workers must be at least 1, got {self.config.num_workers}")

        ctx = mp.get_context(self.config.start_method)
        with ctx.Manager() as manager:
            state = SearchState(manager, ctx)
            self.start_time = time.time()

            reporter = ProgressReporter(
                state,
                self.expected_iterations,
                self.start_time,
                interval=self.config.report_interval,
                disable=not self.config.show_progress
            )
            reporter.start()

            logger.debug(f"Starting {self.num_workers} workers for prefix '{prefix}'")
            with ProcessPoolExecutor(max_workers=self.num_workers, mp_context=ctx,
                                     initializer=init_worker, initargs=(state,)) as executor:
                futures = [
                    executor.submit(search_worker, worker_id, prefix, self.config.mode,
                                    self.config.batch_size, self.start_time)
                    for worker_id in range(self.num_workers)
                ]
                try:
                    self._supervise(futures, state, reporter)
                except BaseException:
                    # Ctrl+C or worker failure: make every worker exit its loop
                    state.stop()
                    reporter.join()
                    raise

            outcome = state.result()

        return SearchResult(
            candidate=outcome['candidate'],
            iterations=outcome['iterations'],
            elapsed_seconds=outcome['elapsed'],
            expected_iterations=self.expected_iterations
        )

    def _supervise(self, futures, state, reporter):
        # Returns once all workers exited, or as soon as one of them raised
        done, _ = concurrent.futures.wait(futures, return_when=concurrent.futures.FIRST_EXCEPTION)

        for future in done:
            error = future.exception()
            if error is not None:
                logger.error(f"Worker failed: {error}")
                raise SearchAbortedError(f"Worker failed, search aborted: {error}") from error

        reporter.join()
        self.winners = sum(1 for future in futures if future.result())
        logger.debug(f"All workers finished after {state.iterations:,} counted iterations")
