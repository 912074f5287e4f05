"""Shared constants, the codec registry and argument types for file and stream services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_RPC_PATH = "/_rpcx_"
"""Path used when serving RPC over HTTP."""

AUTH_KEY = "__AUTH"
"""Metadata key that carries authentication data."""

SERVER_ADDRESS = "__ServerAddress"
"""Metadata key a client uses to learn the address of the server."""

SERVER_TIMEOUT = "__ServerTimeout"
"""Metadata key carrying the client's timeout for the server."""

SEND_FILE_SERVICE_NAME = "_filetransfer"
"""Name of the file transfer service."""

STREAM_SERVICE_NAME = "_streamservice"
"""Name of the stream service."""

CONTEXT_TAGS_LOCK = "_tagsLock"
"""Context key under which a shared context stores its tags lock."""

TRACE = False
"""Whether trace logging is enabled; meant for tests, not production."""

CODECS: dict[Any, Any] = {}
"""Registered codecs, keyed by serialize type."""


def register_codec(serialize_type: Any, codec: Any) -> None:
    """Register ``codec`` for ``serialize_type``, replacing any earlier one."""
    CODECS[serialize_type] = codec


class ContextKey(str):
    """Key type for values stored in a context."""

    __slots__ = ()


REQ_META_DATA_KEY = ContextKey("__req_metadata")
"""Context key for request metadata."""

RES_META_DATA_KEY = ContextKey("__res_metadata")
"""Context key for response metadata."""


@dataclass
class FileTransferArgs:
    """Arguments a client sends to upload a file."""

    file_name: str = ""
    file_size: int = 0
    meta: dict[str, str] = field(default_factory=dict)

    def clone(self) -> FileTransferArgs:
        """Return a copy whose metadata can be changed independently."""
        return FileTransferArgs(
            file_name=self.file_name,
            file_size=self.file_size,
            meta=dict(self.meta or {}),
        )


@dataclass
class FileTransferReply:
    """Token and address handed to a client for a file transfer."""

    token: bytes = b""
    addr: str = ""


@dataclass
class DownloadFileArgs:
    """Arguments a client sends to download a file."""

    file_name: str = ""
    meta: dict[str, str] = field(default_factory=dict)

    def clone(self) -> DownloadFileArgs:
        """Return a copy whose metadata can be changed independently."""
        return DownloadFileArgs(file_name=self.file_name, meta=dict(self.meta or {}))


@dataclass
class StreamServiceArgs:
    """Request for the stream service."""

    meta: dict[str, str] = field(default_factory=dict)


@dataclass
class StreamServiceReply:
    """Reply from the stream service."""

    token: bytes = b""
    addr: str = ""