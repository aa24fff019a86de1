import queue
import threading
import time

import pytest

from rvipc.frame_queue import FrameData, FrameQueue, FrameType, QueueClosed


def _frame(n):
    return FrameData(type=FrameType.ENCODED, data=bytes([n]) * (n + 1), pts=n)


def test_frame_type_survives_queue():
    q = FrameQueue(2)
    q.push(FrameData(type=FrameType.RAW_YUV, data=b"y"))
    q.push(_frame(1))
    assert int(q.pop().type) == 0
    assert int(q.pop().type) == 1


def test_frame_size_follows_data():
    assert FrameData(data=b"abcd").size == 4


def test_default_capacity():
    assert FrameQueue().capacity == 8


def test_non_positive_capacity_uses_default():
    assert FrameQueue(0).capacity == 8
    assert FrameQueue(-3).capacity == 8


def test_fifo_order():
    q = FrameQueue(4)
    for n in range(4):
        q.push(_frame(n))
    assert [q.pop().pts for _ in range(4)] == [0, 1, 2, 3]


def test_wraparound_keeps_order():
    q = FrameQueue(3)
    out = []
    for n in range(10):
        q.push(_frame(n), timeout=0)
        if len(q) == 3:
            out.append(q.pop(timeout=0).pts)
    while not q.is_empty():
        out.append(q.pop().pts)
    assert out == list(range(10))


def test_len_and_is_empty():
    q = FrameQueue(2)
    assert q.is_empty() and len(q) == 0
    q.push(_frame(1))
    assert not q.is_empty() and len(q) == 1


def test_push_full_zero_timeout_raises_full():
    q = FrameQueue(1)
    q.push(_frame(0))
    with pytest.raises(queue.Full):
        q.push(_frame(1), timeout=0)


def test_push_full_short_timeout_raises_full():
    q = FrameQueue(1)
    q.push(_frame(0))
    with pytest.raises(queue.Full):
        q.push(_frame(1), timeout=0.05)
    assert len(q) == 1


def test_pop_empty_timeout_raises_empty():
    q = FrameQueue(2)
    with pytest.raises(queue.Empty):
        q.pop(timeout=0.05)


def test_try_push_and_try_pop():
    q = FrameQueue(1)
    assert q.try_push(_frame(5)) is True
    assert q.try_push(_frame(6)) is False
    assert q.try_pop().pts == 5
    assert q.try_pop() is None


def test_push_after_close_raises():
    q = FrameQueue(2)
    q.close()
    assert q.is_closed()
    with pytest.raises(QueueClosed):
        q.push(_frame(0))


def test_try_push_after_close_fails():
    q = FrameQueue(2)
    q.close()
    assert q.try_push(_frame(0)) is False


def test_pop_drains_then_raises_after_close():
    q = FrameQueue(2)
    q.push(_frame(1))
    q.close()
    assert q.pop().pts == 1
    with pytest.raises(QueueClosed):
        q.pop()


def test_try_pop_works_after_close():
    q = FrameQueue(2)
    q.push(_frame(3))
    q.close()
    assert q.try_pop().pts == 3


def test_close_wakes_blocked_pop():
    q = FrameQueue(2)
    errors = []

    def worker():
        try:
            q.pop()
        except QueueClosed as exc:
            errors.append(exc)

    t = threading.Thread(target=worker)
    t.start()
    time.sleep(0.05)
    q.close()
    t.join(timeout=2)
    assert not t.is_alive()
    assert len(errors) == 1
    assert q.is_closed() is True
    assert q.try_pop() is None


def test_blocked_push_resumes_after_pop():
    q = FrameQueue(1)
    q.push(_frame(0))
    done = threading.Event()

    def worker():
        q.push(_frame(1))
        done.set()

    t = threading.Thread(target=worker)
    t.start()
    time.sleep(0.05)
    assert not done.is_set()
    assert q.pop().pts == 0
    t.join(timeout=2)
    assert done.is_set()
    assert q.pop(timeout=0).pts == 1


def test_producer_consumer_threads():
    q = FrameQueue(3)
    received = []

    def consumer():
        while True:
            try:
                received.append(q.pop().pts)
            except QueueClosed:
                return

    t = threading.Thread(target=consumer)
    t.start()
    for n in range(50):
        q.push(_frame(n % 200), timeout=2)
    q.close()
    t.join(timeout=5)
    assert received == list(range(50))
    assert len(q) == 0
    assert q.is_empty() is True
    assert q.try_pop() is None