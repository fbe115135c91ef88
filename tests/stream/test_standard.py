import os

from treecomplete.stream import StandardStreams, ThreadSafeSink, get_standard_streams


def test_standard_streams_write_immediately():
    r, w = os.pipe()
    try:
        streams = StandardStreams(stdout_fd=w, stderr_fd=w)
        streams.stdout.write("out ")
        streams.stderr.write("err")
        assert os.read(r, 7) == b"out err"
    finally:
        os.close(r)
        os.close(w)


def test_standard_streams_created_once():
    streams = StandardStreams()
    assert isinstance(streams.stdout, ThreadSafeSink)
    assert streams.stdout is streams.stdout
    assert streams.stdout is not streams.stderr


def test_get_standard_streams_is_shared():
    assert get_standard_streams() is get_standard_streams()


def test_standard_streams_do_not_own_descriptors():
    r, w = os.pipe()
    try:
        StandardStreams(stdout_fd=w).stdout.close()
        os.write(w, b"still open")
    finally:
        os.close(r)
        os.close(w)
