import threading

import pytest


def test_initial_state(state):
    assert not state.is_found()
    assert state.iterations == 0
    assert state.result() is None


def test_claim_succeeds_exactly_once(state):
    assert state.claim()
    assert state.is_found()
    assert not state.claim()
    assert not state.claim()


def test_stop_blocks_later_claims(state):
    state.stop()

    assert state.is_found()
    assert not state.claim()
    assert state.result() is None


def test_concurrent_claims_have_one_winner(state):
    barrier = threading.Barrier(16)
    wins = []

    def contend():
        barrier.wait()
        wins.append(state.claim())

    threads = [threading.Thread(target=contend) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert wins.count(True) == 1
    assert wins.count(False) == 15


def test_add_iterations_returns_running_total(state):
    assert state.add_iterations(1000) == 1000
    assert state.add_iterations(250) == 1250
    assert state.iterations == 1250


def test_concurrent_increments_are_not_lost(state):
    def flush():
        for _ in range(200):
            state.add_iterations(5)

    threads = [threading.Thread(target=flush) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert state.iterations == 8 * 200 * 5


def test_record_and_read_result(state, fast_candidate):
    state.claim()
    state.record_result(fast_candidate, 42, 1.5)

    outcome = state.result()
    assert outcome['candidate'] == fast_candidate
    assert outcome['iterations'] == 42
    assert outcome['elapsed'] == 1.5


def test_result_slot_is_never_overwritten(state, fast_candidate, mnemonic_candidate):
    state.claim()
    state.record_result(fast_candidate, 1, 0.1)

    with pytest.raises(RuntimeError):
        state.record_result(mnemonic_candidate, 2, 0.2)

    assert state.result()['candidate'] == fast_candidate
