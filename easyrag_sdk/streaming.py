"""
Streaming query support.

The service answers a streaming query with a chunked body of lines of the form
``data: <json>``. ``FrameDecoder`` turns raw chunks into events independently
of any transport, and ``QueryStream`` drives it from an open httpx response.
"""

import asyncio
import codecs
import json
from collections import deque
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx

from .exceptions import RequestTimeoutError, StreamingError
from .logging_config import get_logger
from .models import DeltaEvent, DoneEvent, ErrorEvent, parse_stream_event

logger = get_logger(__name__)

DATA_PREFIX = "data: "

Event = DeltaEvent | DoneEvent | ErrorEvent


class FrameDecoder:
    """Incremental decoder from raw byte chunks to stream events.

    Decoding is stateful, so a multi-byte character split across two chunks is
    emitted once both halves have arrived. Only complete lines are parsed; the
    trailing partial line waits for the next chunk. Lines without the ``data: ``
    prefix are ignored and frames that are not valid JSON are dropped.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline, not yet parsed."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[Event]:
        """Consume one chunk and return the events completed by it, in order."""
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return self._parse_lines(lines)

    def flush(self) -> list[Event]:
        """Finish decoding at end of stream; a final unterminated frame is still parsed."""
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        if not tail:
            return []
        return self._parse_lines([tail])

    def _parse_lines(self, lines: list[str]) -> list[Event]:
        events = []
        for line in lines:
            line = line.rstrip("\r")
            if not line.startswith(DATA_PREFIX):
                continue

            raw = line[len(DATA_PREFIX):]
            try:
                payload = json.loads(raw)
            except ValueError:
                logger.debug("Skipping malformed stream frame", frame=raw[:200])
                continue

            event = parse_stream_event(payload)
            if event is None:
                logger.debug("Skipping unrecognised stream frame", frame=raw[:200])
                continue
            events.append(event)
        return events


class QueryStream:
    """
    Pull-based handle over one streaming query response.

    Usage:
        async with client.query.stream("my-dataset", "What is RAG?") as stream:
            async for event in stream:
                ...

    Events arrive in the order their frames were sent. Iteration ends when the
    body ends or after a ``done``/``error`` event. Each chunk must arrive within
    ``read_timeout`` seconds, otherwise RequestTimeoutError is raised.
    """

    def __init__(
        self,
        opener: Callable[[], Awaitable[httpx.Response]],
        *,
        read_timeout: float,
    ):
        self._opener = opener
        self._read_timeout = read_timeout
        self._response: httpx.Response | None = None
        self._decoder = FrameDecoder()
        self._chunks: AsyncIterator[bytes] | None = None
        self._pending: deque[Event] = deque()
        self._read_task: asyncio.Future[bytes] | None = None
        self._exhausted = False
        self._cancelled = False
        self._closed = False

    @property
    def response(self) -> httpx.Response | None:
        """The open HTTP response, or None before the first read."""
        return self._response

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "QueryStream":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __aiter__(self) -> "QueryStream":
        return self

    async def __anext__(self) -> Event:
        event = await self.next_event()
        if event is None:
            raise StopAsyncIteration
        return event

    async def next_event(self) -> Event | None:
        """Return the next event, or None once the stream has ended or was cancelled."""
        while not self._pending:
            if self._exhausted:
                return None

            chunk = await self._read_chunk()
            if self._cancelled:
                return None
            if chunk is None:
                self._pending.extend(self._decoder.flush())
                self._exhausted = True
                await self.aclose()
            else:
                self._pending.extend(self._decoder.feed(chunk))

        event = self._pending.popleft()
        if event.is_terminal:
            self._pending.clear()
            self._exhausted = True
            await self.aclose()
        return event

    @property
    async def text_stream(self) -> AsyncIterator[str]:
        """Yield only the generated text fragments."""
        async for event in self:
            if isinstance(event, DeltaEvent):
                yield event.delta
            elif isinstance(event, ErrorEvent):
                raise StreamingError(event.error, details=event.to_wire())

    async def get_final_text(self) -> str:
        """Consume the rest of the stream and return the concatenated answer."""
        parts = []
        async for text in self.text_stream:
            parts.append(text)
        return "".join(parts)

    async def cancel(self) -> None:
        """
        Stop consuming; remaining and future events are discarded.

        Safe to call from another task while a read is waiting on the
        network: that read returns None instead of an event.
        """
        self._cancelled = True
        self._pending.clear()
        self._exhausted = True
        await self.aclose()

    async def open(self) -> None:
        """
        Send the request and check the status without reading any event.

        Called implicitly by ``async with`` and by the first read.
        """
        if self._response is not None or self._closed:
            return
        try:
            self._response = await self._opener()
        except BaseException:
            self._closed = True
            self._exhausted = True
            raise

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._exhausted = True
        try:
            if self._read_task is not None and not self._read_task.done():
                # The byte iterator cannot be closed while a read is running in it
                self._read_task.cancel()
                await asyncio.wait([self._read_task])
            if self._chunks is not None:
                await self._chunks.aclose()
        finally:
            if self._response is not None:
                await self._response.aclose()

    async def _read_chunk(self) -> bytes | None:
        if self._chunks is None:
            await self.open()
            if self._response is None:
                return None
            self._chunks = self._response.aiter_bytes()

        self._read_task = asyncio.ensure_future(self._chunks.__anext__())
        try:
            return await asyncio.wait_for(self._read_task, self._read_timeout)
        except StopAsyncIteration:
            return None
        except asyncio.CancelledError:
            if self._cancelled and self._read_task.cancelled():
                return None
            raise
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Stream timed out", timeout=self._read_timeout)
            await self.aclose()
            raise RequestTimeoutError(details=e) from e
        except (httpx.HTTPError, OSError) as e:
            logger.warning("Stream failed", error=str(e))
            await self.aclose()
            raise StreamingError(str(e) or "Streaming error", details=e) from e
