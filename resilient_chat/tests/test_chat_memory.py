"""Unit tests for the unbounded and bounded chat memories."""
from __future__ import annotations

import threading

import pytest

from resilient_chat.base.cancellation import CancellationToken, CancelledError
from resilient_chat.base.interfaces import ChatMemory, ClearPolicy
from resilient_chat.base.memory import FiniteQueueChatMemory, SimpleChatMemory
from resilient_chat.base.models import Message, Role


def _turns(n: int):
    return [Message.user(f"m{i}") if i % 2 == 0 else Message.assistant(f"m{i}") for i in range(n)]


def test_implementations_satisfy_protocol():
    assert isinstance(SimpleChatMemory(), ChatMemory)
    assert isinstance(FiniteQueueChatMemory(3), ChatMemory)


def test_simple_memory_grows_without_limit_in_order():
    memory = SimpleChatMemory()
    for message in _turns(50):
        memory.add_message(message)

    assert len(memory) == 50
    assert [m.content for m in memory.messages] == [f"m{i}" for i in range(50)]


@pytest.mark.parametrize("capacity", [1, 2, 5])
@pytest.mark.parametrize("appends", [0, 1, 4, 5, 6, 13])
def test_bounded_memory_keeps_most_recent(capacity, appends):
    memory = FiniteQueueChatMemory(max_messages=capacity)
    turns = _turns(appends)
    for message in turns:
        memory.add_message(message)

    assert len(memory) <= capacity
    assert list(memory.snapshot()) == turns[-capacity:]


@pytest.mark.parametrize("appends", [0, 2, 3, 9])
def test_seeded_prompt_is_exempt_and_first(appends):
    memory = FiniteQueueChatMemory(max_messages=3, system_prompt="rules")
    turns = _turns(appends)
    for message in turns:
        memory.add_message(message)

    snapshot = memory.snapshot()
    assert snapshot[0] == Message.system("rules")
    assert list(snapshot[1:]) == turns[-3:]
    assert memory.turn_count <= 3
    assert len(memory) == memory.turn_count + 1


def test_bounded_memory_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        FiniteQueueChatMemory(0)


def test_clear_reseeds_by_default():
    memory = SimpleChatMemory(system_prompt="rules")
    memory.add_message(Message.user("hi"))

    memory.clear()

    assert memory.clear_policy is ClearPolicy.RESEED
    assert memory.snapshot() == (Message.system("rules"),)


def test_clear_with_empty_policy_drops_prompt():
    memory = FiniteQueueChatMemory(4, system_prompt="rules", clear_policy=ClearPolicy.EMPTY)
    memory.add_message(Message.user("hi"))

    memory.clear()

    assert memory.snapshot() == ()
    assert len(memory) == 0
    memory.add_message(Message.user("again"))
    assert memory.snapshot() == (Message.user("again"),)


def test_clear_policy_accepts_wire_string():
    memory = SimpleChatMemory(system_prompt="rules", clear_policy="empty")
    memory.clear()

    assert memory.clear_policy is ClearPolicy.EMPTY
    assert len(memory) == 0


def test_bounded_memory_capacity_survives_clear():
    memory = FiniteQueueChatMemory(2)
    memory.clear()
    for message in _turns(5):
        memory.add_message(message)

    assert memory.turn_count == 2


def test_snapshot_is_independent_of_later_appends():
    memory = SimpleChatMemory()
    memory.add_message(Message.user("one"))
    snapshot = memory.snapshot()

    memory.add_message(Message.assistant("two"))

    assert snapshot == (Message.user("one"),)
    assert isinstance(snapshot, tuple)


def test_cancelled_token_blocks_append():
    memory = SimpleChatMemory()
    token = CancellationToken.cancelled_token("gone")

    with pytest.raises(CancelledError):
        memory.add_message(Message.user("hi"), token)
    assert len(memory) == 0


def test_live_token_allows_append():
    memory = SimpleChatMemory()
    memory.add_message(Message.user("hi"), CancellationToken())

    assert memory.snapshot()[0].role is Role.USER


def test_concurrent_appends_are_all_recorded_within_bound():
    memory = FiniteQueueChatMemory(max_messages=100)
    unbounded = SimpleChatMemory()

    def worker(n: int) -> None:
        for i in range(50):
            memory.add_message(Message.user(f"{n}-{i}"))
            unbounded.add_message(Message.user(f"{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(memory) == 100
    assert len(unbounded) == 400
