"""
Search worker process.

Each worker runs a tight generate-and-test loop until the shared found
flag is raised. The flag is checked once per generated candidate, so after
a match every other worker does at most one more generation before exiting.
"""

import logging
import time

from vanity.keygen import KeygenMode, generate_candidate

logger = logging.getLogger(__name__)

# Set in each worker process by init_worker
_state = None


def init_worker(state):
    """Pool initializer: make the shared SearchState visible to this process."""
    global _state
    _state = state


def search_worker(worker_id: int, prefix: str, mode: KeygenMode,
                  batch_size: int, start_time: float, state=None) -> bool:
    """Search until any worker finds a match.

    Returns True only for the worker that claimed the result slot.

    Local attempts are flushed to the shared counter every ``batch_size``
    iterations instead of on every draw. Larger batches mean less lock
    traffic but a reported count that trails the real one by up to one
    batch per worker.
    """
    state = state or _state
    local_iterations = 0
    logger.debug(f"Worker {worker_id}: started ({mode.value} mode)")

    while not state.is_found():
        candidate = generate_candidate(mode)
        local_iterations += 1

        if local_iterations % batch_size == 0:
            state.add_iterations(batch_size)

        if candidate.address.startswith(prefix):
            if not state.claim():
                # Another worker got there first
                logger.debug(f"Worker {worker_id}: match {candidate.address} lost the race")
                return False

            final_iterations = state.add_iterations(local_iterations % batch_size)
            elapsed = time.time() - start_time
            state.record_result(candidate, final_iterations, elapsed)
            logger.debug(f"Worker {worker_id}: found {candidate.address}")
            return True

    logger.debug(f"Worker {worker_id}: stopping after {local_iterations:,} local iterations")
    return False
