import gzip

import pytest

from rpcxkit.compress import unzip_bytes, zip_bytes

SAMPLE = (
    "%5B%7B%22service%22%3A%22AttrDict%22%2C%22service_address%22%3A%22udp%40127.0.0.1"
    "%3A5353%22%7D%2C%7B%22service%22%3A%22BrasInfo%22%2C%22service_address%22%3A%22udp"
    "%40127.0.0.1%3A5353%22%7D%5D"
)


def test_zip_round_trip():
    data = zip_bytes(SAMPLE.encode())
    assert unzip_bytes(data).decode() == SAMPLE


def test_zip_output_is_gzip():
    assert zip_bytes(b"hello")[:2] == b"\x1f\x8b"


def test_zip_readable_by_standard_gzip():
    assert gzip.decompress(zip_bytes(SAMPLE.encode())) == SAMPLE.encode()


def test_empty_payload_round_trip():
    assert unzip_bytes(zip_bytes(b"")) == b""


def test_concatenated_members():
    assert unzip_bytes(zip_bytes(b"ab") + zip_bytes(b"cd")) == b"abcd"


@pytest.mark.parametrize("bad", [b"", b"not gzip at all", zip_bytes(b"payload")[:-6]])
def test_unzip_invalid(bad):
    with pytest.raises(ValueError):
        unzip_bytes(bad)