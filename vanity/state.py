"""
Shared search state.

One SearchState is created per search and handed to every worker process
and to the progress reporter. It owns:

- found: a shared bool. Readers poll it without locking. The single
  false -> true transition happens in claim() under the flag's own lock,
  so exactly one caller ever wins.
- iterations: a shared unsigned 64-bit counter. Workers add to it in
  batches under its lock; the reporter reads it without locking and may
  lag the true count by up to one batch per worker.
- result slot: a manager dict guarded by a separate lock. Only the worker
  that won claim() writes it, after the claim, and it is never overwritten.
  The coordinator reads it after every worker has exited.
"""

import ctypes
import logging
import multiprocessing as mp

logger = logging.getLogger(__name__)


class SearchState:
    """Found flag, iteration counter and single-slot result hand-off."""

    def __init__(self, manager, ctx=None):
        ctx = ctx or mp.get_context()
        self._found = ctx.Value(ctypes.c_bool, False)
        self._iterations = ctx.Value(ctypes.c_uint64, 0)
        self._result_lock = ctx.Lock()
        self._slot = manager.dict()

    def is_found(self) -> bool:
        return self._found.get_obj().value

    def claim(self) -> bool:
        """Atomically flip found from False to True. Returns True for the one caller that did it."""
        with self._found.get_lock():
            if self._found.value:
                return False
            self._found.value = True
            return True

    def stop(self):
        """Raise the flag without claiming the result slot."""
        with self._found.get_lock():
            self._found.value = True

    @property
    def iterations(self) -> int:
        return self._iterations.get_obj().value

    def add_iterations(self, count: int) -> int:
        """Add a batch to the shared counter and return the new total."""
        with self._iterations.get_lock():
            self._iterations.value += count
            return self._iterations.value

    def record_result(self, candidate, iterations: int, elapsed: float):
        with self._result_lock:
            if 'candidate' in self._slot:
                raise RuntimeError("Result slot already written")
            self._slot.update({
                'candidate': candidate,
                'iterations': iterations,
                'elapsed': elapsed
            })
        logger.debug(f"Recorded winning candidate {candidate.address} after {iterations:,} iterations")

    def result(self):
        """Snapshot of the result slot, or None if nothing was recorded."""
        with self._result_lock:
            if 'candidate' not in self._slot:
                return None
            return dict(self._slot)
