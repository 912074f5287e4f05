import pytest

from rpcxkit import share
from rpcxkit.share import (
    CODECS,
    ContextKey,
    DownloadFileArgs,
    FileTransferArgs,
    FileTransferReply,
    StreamServiceArgs,
    StreamServiceReply,
    register_codec,
)


class MockCodec:
    def encode(self, obj):
        return b""

    def decode(self, data, obj):
        return None


@pytest.fixture
def restore_codecs():
    saved = dict(CODECS)
    yield
    CODECS.clear()
    CODECS.update(saved)


def test_register_codec_adds_one(restore_codecs):
    registered = len(CODECS)
    codec = MockCodec()
    register_codec(127, codec)
    assert len(CODECS) == registered + 1
    assert share.CODECS[127] is codec


def test_register_codec_replaces(restore_codecs):
    first, second = MockCodec(), MockCodec()
    register_codec(126, first)
    count = len(CODECS)
    register_codec(126, second)
    assert len(CODECS) == count
    assert CODECS[126] is second


def test_file_transfer_args_clone_is_independent():
    args = FileTransferArgs(file_name="a.txt", file_size=10, meta={"k": "v"})
    copy = args.clone()
    assert copy == args
    copy.meta["k"] = "changed"
    assert args.meta == {"k": "v"}


def test_file_transfer_args_clone_with_none_meta():
    args = FileTransferArgs(file_name="a", file_size=1, meta=None)
    assert args.clone().meta == {}


def test_download_file_args_clone_is_independent():
    args = DownloadFileArgs(file_name="b.bin", meta={"x": "1"})
    copy = args.clone()
    assert copy.file_name == "b.bin"
    assert copy.meta == {"x": "1"}
    copy.meta["y"] = "2"
    assert "y" not in args.meta


def test_defaults():
    assert FileTransferArgs() == FileTransferArgs(file_name="", file_size=0, meta={})
    assert FileTransferReply().token == b""
    assert StreamServiceReply().addr == ""
    assert StreamServiceArgs().meta == {}


def test_context_key_behaves_as_string():
    key = ContextKey("__req_metadata")
    assert key == share.REQ_META_DATA_KEY
    assert {key: 1}["__req_metadata"] == 1