import pytest

from svdash.dash.status import (
    TAI_OFFSET,
    StatusFormatError,
    decode_pid,
    decode_status,
    read_beu64,
    read_lei32,
    read_status,
)

from conftest import NOW, make_record


def test_time_base_is_big_endian():
    assert read_beu64(bytes([0, 0, 0, 0, 0, 0, 0, 0x0A])) == 10
    assert read_beu64(bytes([1, 0, 0, 0, 0, 0, 0, 0])) == 1 << 56


def test_pid_is_little_endian():
    assert read_lei32(bytes([0x2A, 0, 0, 0])) == 42
    assert read_lei32(bytes([0, 0, 0, 0x01])) == 1 << 24


def test_pid_is_signed():
    assert read_lei32(bytes([0xFF, 0xFF, 0xFF, 0xFF])) == -1


def test_decode_known_record():
    rec = bytearray(18)
    rec[0:8] = bytes([0, 0, 0, 0, 0, 0, 0, 0x0A])
    rec[12:16] = bytes([0x2A, 0, 0, 0])
    st = decode_status(bytes(rec), now=100)
    assert st.pid == 42
    assert st.uptime == 100 + TAI_OFFSET - 10


def test_uptime_from_tai_label():
    st = decode_status(make_record(pid=7, started=NOW - 90), now=NOW)
    assert st.pid == 7
    assert st.uptime == 90


def test_zero_pid_means_no_process():
    st = decode_status(make_record(pid=0), now=NOW)
    assert st.pid is None


def test_future_time_base_clamps_to_zero():
    st = decode_status(make_record(pid=5, started=NOW + 30), now=NOW)
    assert st.uptime == 0


def test_runit_record_accepted():
    st = decode_status(make_record(pid=99, started=NOW - 5, size=20), now=NOW)
    assert (st.pid, st.uptime) == (99, 5)


@pytest.mark.parametrize("size", [0, 8, 16, 17])
def test_short_record_rejected(size):
    with pytest.raises(StatusFormatError):
        decode_pid(make_record(pid=1, size=20)[:size])


def test_read_status_from_file(tmp_path):
    p = tmp_path / "status"
    p.write_bytes(make_record(pid=1234, started=NOW - 3600))
    st = read_status(p, now=NOW)
    assert (st.pid, st.uptime) == (1234, 3600)


def test_read_status_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_status(tmp_path / "nope", now=NOW)
