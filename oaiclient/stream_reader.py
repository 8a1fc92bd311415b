"""Reader for server-sent event streams of JSON messages."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_HEADER_DATA = re.compile(rb"^data:[ \t\n\f\r]*")
_ERROR_PREFIX = re.compile(rb'^data:[ \t\n\f\r]*\{"error":')
DEFAULT_EMPTY_MESSAGES_LIMIT = 300


class StreamError(Exception):
    """A stream could not be read."""


class TooManyEmptyStreamMessagesError(StreamError):
    def __init__(self) -> None:
        super().__init__("stream has sent too many empty messages")


class StreamAPIError(StreamError):
    """The server sent an error object instead of stream data."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        self.message = payload.get("message", "")
        self.type = payload.get("type", "")
        self.param = payload.get("param")
        self.code = payload.get("code")
        super().__init__(f"error, {self.message}")


class StreamReader(Generic[T]):
    """Reads ``data:`` messages from an event stream until ``[DONE]``.

    End of stream is signalled by EOFError from ``recv`` and ``recv_raw``;
    iterating the reader simply stops.
    """

    def __init__(
        self,
        lines: Iterable[bytes | str],
        decode: Callable[[bytes], T] = json.loads,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
        on_close: Callable[[], Any] | None = None,
    ) -> None:
        self._lines = iter(lines)
        self._decode = decode
        self.empty_messages_limit = empty_messages_limit
        self._on_close = on_close
        self._finished = False
        self._closed = False
        self._errors = bytearray()

    def recv_raw(self) -> bytes:
        """Return the payload of the next data message."""
        if self._finished:
            raise EOFError("end of stream")
        return self._process_lines()

    def recv(self) -> T:
        """Return the next data message, decoded."""
        return self._decode(self.recv_raw())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                item = self.recv()
            except EOFError:
                return
            yield item

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _next_line(self) -> bytes | None:
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        return line.encode("utf-8") if isinstance(line, str) else bytes(line)

    def _process_lines(self) -> bytes:
        empty_messages = 0
        has_error_prefix = False
        while True:
            raw = self._next_line()
            if raw is None or has_error_prefix:
                error = self._unmarshal_error()
                if error is not None:
                    raise error
                if raw is None:
                    raise EOFError("end of stream")
                raise StreamError("malformed error message in stream")

            line = raw.strip()
            if _ERROR_PREFIX.match(line):
                has_error_prefix = True
            if not _HEADER_DATA.match(line) or has_error_prefix:
                if has_error_prefix:
                    line = _HEADER_DATA.sub(b"", line, count=1)
                self._errors += line
                empty_messages += 1
                if empty_messages > self.empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = _HEADER_DATA.sub(b"", line, count=1)
            if payload == b"[DONE]":
                self._finished = True
                raise EOFError("end of stream")
            return payload

    def _unmarshal_error(self) -> StreamAPIError | None:
        if not self._errors:
            return None
        try:
            document = json.loads(bytes(self._errors))
        except ValueError:
            return None
        if not isinstance(document, dict):
            return None
        error = document.get("error")
        if not isinstance(error, dict):
            return None
        return StreamAPIError(error)