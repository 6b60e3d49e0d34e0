"""
Pipe reader workers.

Each subprocess output stream is consumed by exactly one reader thread doing
blocking reads in a loop. The reader owns its capture buffer; sinks receive
every chunk in the order the OS produced it.
"""

import logging
import sys
import threading
from typing import BinaryIO, Callable, IO, List, Optional

logger = logging.getLogger(__name__)

ChunkSink = Callable[[bytes], None]

DEFAULT_CHUNK_SIZE = 4096


def decode_output(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class SharedLog:
    """
    Append-only byte log written by several readers.

    Appends are serialized by a lock; chunks from different streams land in
    arrival order, which is not a chronological guarantee across streams.
    """

    def __init__(self) -> None:
        self._chunks: List[bytes] = []
        self._lock = threading.Lock()

    def append(self, chunk: bytes) -> None:
        with self._lock:
            self._chunks.append(chunk)

    def getvalue(self) -> bytes:
        with self._lock:
            return b"".join(self._chunks)

    def text(self) -> str:
        return decode_output(self.getvalue())


class PipeForwarder:
    """
    Writes chunks into a child's stdin from any number of readers.

    A broken pipe (the child exited or closed its input) stops forwarding
    silently; capture continues regardless.
    """

    def __init__(self, pipe: BinaryIO):
        self._pipe = pipe
        self._lock = threading.Lock()
        self._broken = False

    @property
    def broken(self) -> bool:
        return self._broken

    def write(self, chunk: bytes) -> None:
        with self._lock:
            if self._broken:
                return
            try:
                self._pipe.write(chunk)
                self._pipe.flush()
            except (BrokenPipeError, ValueError, OSError) as e:
                self._broken = True
                logger.debug(f"Stopped forwarding output: {e}")

    def close(self) -> None:
        with self._lock:
            try:
                self._pipe.close()
            except (BrokenPipeError, OSError) as e:
                logger.debug(f"Error closing forwarded pipe: {e}")
            self._broken = True


def terminal_sink(stream: Optional[IO]) -> ChunkSink:
    """
    Mirror chunks to a text stream such as sys.stdout, using its binary
    buffer when it has one so bytes pass through unchanged.
    """

    def write(chunk: bytes) -> None:
        target = stream if stream is not None else sys.stdout
        binary = getattr(target, "buffer", None)
        try:
            if binary is not None:
                target.flush()
                binary.write(chunk)
                binary.flush()
            else:
                target.write(decode_output(chunk))
                target.flush()
        except (ValueError, OSError) as e:
            logger.debug(f"Could not mirror output: {e}")

    return write


class StreamReader:
    """
    Reads one pipe to end-of-file on a dedicated thread.
    """

    def __init__(self, pipe: BinaryIO, name: str, sinks: Optional[List[ChunkSink]] = None,
                 chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.pipe = pipe
        self.name = name
        self.sinks = list(sinks or [])
        self.chunk_size = chunk_size
        self._buffer = bytearray()
        self._eof = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "StreamReader":
        self._thread = threading.Thread(
            target=self._run, name=f"reader-{self.name}", daemon=True
        )
        self._thread.start()
        return self

    def _read_chunk(self) -> bytes:
        read1 = getattr(self.pipe, "read1", None)
        if read1 is not None:
            return read1(self.chunk_size)
        return self.pipe.read(self.chunk_size)

    def _consume(self, chunk: bytes) -> None:
        self._buffer.extend(chunk)
        for sink in self.sinks:
            sink(chunk)

    def _run(self) -> None:
        try:
            while True:
                chunk = self._read_chunk()
                if not chunk:
                    break
                self._consume(chunk)
        except (ValueError, OSError) as e:
            logger.debug(f"Reader {self.name} stopped: {e}")
        finally:
            self._eof.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        if self._thread is not None:
            self._thread.join(timeout)
        return self._eof.is_set()

    def drain(self) -> None:
        """
        Final single-threaded read of anything left in the pipe.

        Only valid once the reader thread has finished.
        """
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError(f"Reader {self.name} is still running")
        try:
            remainder = self.pipe.read()
        except (ValueError, OSError):
            remainder = b""
        if remainder:
            self._consume(remainder)
        try:
            self.pipe.close()
        except OSError:
            pass

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def text(self) -> str:
        return decode_output(self.getvalue())
