import threading
import uuid
from datetime import timezone

from spanpaxos.leader_state import LeaderState, LogPosition


def test_new_state_starts_at_zero():
    state = LeaderState()
    assert state.term_number == 0
    assert state.commit_index == 0
    assert state.next_index() == 0


def test_times_are_utc():
    state = LeaderState()
    assert state.lease_expiry_time.tzinfo == timezone.utc
    assert state.t_safe == state.lease_expiry_time


def test_log_position_defaults():
    position = LogPosition()
    assert (position.match_index, position.next_index) == (0, 0)


def test_inc_next_index_for_leader():
    state = LeaderState()
    before = state.next_index()
    state.inc_next_index()
    assert state.next_index() == before + 1
    assert state.next_index(state.id) == state.next_index()


def test_inc_next_index_is_per_member():
    state = LeaderState()
    member = uuid.uuid4()
    state.inc_next_index(member)
    state.inc_next_index(member)
    assert state.next_index(member) == 2
    assert state.next_index() == 0


def test_commit_index_and_has_committed():
    state = LeaderState()
    state.update_commit_index(5)
    assert state.commit_index == 5
    assert state.has_committed(5)
    assert state.has_committed(4)
    assert not state.has_committed(6)


def test_has_quorum_empty_board_is_false():
    state = LeaderState()
    assert not state.has_quorum(0)


def test_has_quorum_single_member():
    state = LeaderState()
    state.update_match_index(3)
    assert state.has_quorum(3)
    assert not state.has_quorum(4)


def test_has_quorum_needs_majority():
    state = LeaderState()
    first, second = uuid.uuid4(), uuid.uuid4()
    state.update_match_index(3)
    state.update_match_index(0, first)
    state.update_match_index(0, second)
    assert not state.has_quorum(3)
    state.update_match_index(3, first)
    assert state.has_quorum(3)


def test_next_index_registers_member_on_board():
    state = LeaderState()
    state.update_match_index(1)
    assert state.has_quorum(1)
    state.next_index(uuid.uuid4())
    # One of two members matched: a majority of two needs both.
    assert not state.has_quorum(1)


def test_concurrent_increments_are_not_lost():
    state = LeaderState()
    member = uuid.uuid4()
    threads_count, per_thread = 4, 500

    def work():
        for _ in range(per_thread):
            state.inc_next_index(member)

    threads = [threading.Thread(target=work) for _ in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert state.next_index(member) == threads_count * per_thread