"""
Live progress reporting for a running search.
"""

import logging
import sys
import threading
import time
from dataclasses import dataclass

from tqdm import tqdm

from vanity.core import DEFAULT_REPORT_INTERVAL
from vanity.utils import format_duration, format_number

logger = logging.getLogger(__name__)


@dataclass
class ProgressSample:
    """One reading of the shared counter plus the reading before it."""
    iterations: int
    elapsed: float
    previous_iterations: int = 0
    previous_elapsed: float = 0.0

    @property
    def rate(self) -> float:
        """Instantaneous rate since the previous sample."""
        delta_time = self.elapsed - self.previous_elapsed
        if delta_time <= 0:
            return 0.0
        return (self.iterations - self.previous_iterations) / delta_time

    @property
    def overall_rate(self) -> float:
        if self.elapsed <= 0:
            return 0.0
        return self.iterations / self.elapsed

    def progress_percent(self, expected_iterations: int) -> float:
        # Draws are probabilistic and can pass the expectation, so cap for display
        if expected_iterations <= 0:
            return 100.0
        return min(100.0, self.iterations / expected_iterations * 100.0)

    def eta_seconds(self, expected_iterations: int) -> float:
        rate = self.overall_rate
        if rate <= 0:
            return 0.0
        return max(0.0, (expected_iterations - self.iterations) / rate)

    def render(self, expected_iterations: int) -> str:
        return (
            f"🔍 Iterations: {format_number(self.iterations)} | "
            f"Rate: {format_number(self.rate)}/s | "
            f"Progress: {self.progress_percent(expected_iterations):.2f}% | "
            f"ETA: {format_duration(self.eta_seconds(expected_iterations))} | "
            f"Elapsed: {format_duration(self.elapsed)}"
        )


class ProgressReporter(threading.Thread):
    """Samples the shared counter once per interval and rewrites a single status line.

    Stops within one interval of the found flag being raised.
    """

    def __init__(self, state, expected_iterations: int, start_time: float,
                 interval: float = DEFAULT_REPORT_INTERVAL, disable: bool = False, file=None):
        super().__init__(name="progress-reporter", daemon=True)
        self.state = state
        self.expected_iterations = expected_iterations
        self.start_time = start_time
        self.interval = interval
        self.disable = disable
        self.file = file or sys.stdout
        self.samples = 0
        self.last_sample = None

    def run(self):
        status_line = tqdm(
            total=self.expected_iterations,
            bar_format='{desc}',
            file=self.file,
            disable=self.disable,
            leave=True
        )
        last_count = 0
        last_elapsed = 0.0
        try:
            while not self.state.is_found():
                time.sleep(self.interval)
                if self.state.is_found():
                    break

                sample = ProgressSample(
                    iterations=self.state.iterations,
                    elapsed=time.time() - self.start_time,
                    previous_iterations=last_count,
                    previous_elapsed=last_elapsed
                )
                status_line.set_description_str(sample.render(self.expected_iterations))
                self.samples += 1
                self.last_sample = sample

                last_count = sample.iterations
                last_elapsed = sample.elapsed
        finally:
            status_line.close()
        logger.debug(f"Progress reporter stopped after {self.samples} samples")
