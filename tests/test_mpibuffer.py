import numpy as np
import pytest

from chunkpic.mpibuffer import PACKED_SIZE, MpiBuffer


def _filled():
    buf = MpiBuffer()
    buf.sendwait = True
    buf.recvwait = False
    buf.sendbuf.resize(40)
    buf.recvbuf.resize(24)
    buf.bufsize = np.arange(27, dtype=np.int32).reshape(3, 3, 3)
    buf.bufaddr = (np.arange(27, dtype=np.int32) * 2).reshape(3, 3, 3)
    return buf


def test_defaults():
    buf = MpiBuffer()
    assert buf.sendwait is False
    assert buf.recvwait is False
    assert buf.sendbuf.size == 0
    assert buf.bufsize.shape == (3, 3, 3)


def test_send_buffer_view_starts_at_address():
    buf = MpiBuffer()
    buf.sendbuf.resize(10)
    buf.bufaddr[0, 0, 1] = 4
    view = buf.get_send_buffer(0, 0, 1)
    view[0] = 7
    assert buf.sendbuf.data[4] == 7
    assert len(view) == 6


def test_recv_buffer_view_starts_at_address():
    buf = MpiBuffer()
    buf.recvbuf.resize(8)
    buf.bufaddr[2, 1, 0] = 3
    buf.get_recv_buffer(2, 1, 0)[1] = 9
    assert buf.recvbuf.data[4] == 9


def test_pack_length_matches_packed_size():
    assert len(_filled().pack()) == PACKED_SIZE


def test_pack_unpack_round_trip():
    original = _filled()
    restored = MpiBuffer()
    end = restored.unpack(original.pack(), 0)
    assert end == PACKED_SIZE
    assert restored.sendwait is True
    assert restored.recvwait is False
    assert restored.sendbuf.size == 40
    assert restored.recvbuf.size == 24
    assert np.array_equal(restored.bufsize, original.bufsize)
    assert np.array_equal(restored.bufaddr, original.bufaddr)


def test_unpack_at_offset():
    original = _filled()
    data = b"\xff" * 5 + original.pack()
    restored = MpiBuffer()
    assert restored.unpack(data, 5) == 5 + PACKED_SIZE
    assert np.array_equal(restored.bufaddr, original.bufaddr)


def test_unpack_truncated_raises():
    data = _filled().pack()[:-1]
    with pytest.raises(ValueError):
        MpiBuffer().unpack(data, 0)


def test_size_byte_grows_with_buffers():
    buf = MpiBuffer()
    before = buf.size_byte
    buf.sendbuf.resize(100)
    buf.recvbuf.resize(50)
    assert buf.size_byte - before == 150