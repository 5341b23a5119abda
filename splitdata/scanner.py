from collections import deque
from typing import Optional

NEWLINE = b"\n"


class LineView:
    """
    A line borrowed from a ReadBuffer, excluding its terminator.

    The bytes are not copied: each segment is a memoryview over one of the
    chunks that were appended to the buffer. A line that straddles read
    chunks is backed by more than one segment.
    """

    __slots__ = ("segments",)

    def __init__(self, segments: list[memoryview]):
        self.segments = segments

    def __len__(self) -> int:
        return sum(len(segment) for segment in self.segments)

    @property
    def is_single_segment(self) -> bool:
        return len(self.segments) == 1

    @property
    def first(self) -> memoryview:
        return self.segments[0]

    def tobytes(self) -> bytes:
        """
        Materialize the line into one flat bytes object sized to the line.
        """
        if self.is_single_segment:
            return self.first.tobytes()
        return b"".join(self.segments)

    def startswith(self, prefix: bytes) -> bool:
        """
        Compare the leading bytes across segments without joining them.
        """
        offset = 0
        for segment in self.segments:
            if offset >= len(prefix):
                break
            part = segment[: len(prefix) - offset]
            if part != prefix[offset : offset + len(part)]:
                return False
            offset += len(part)
        return offset >= len(prefix)


class ReadBuffer:
    """
    Queue of byte chunks read from the input, scanned for newline-terminated
    lines.

    Bytes that belong to a line already handed out are released from the
    queue. A trailing partial line stays queued until more chunks arrive, and
    the chunks it covers are never scanned for a terminator twice.
    """

    def __init__(self):
        self._chunks = deque()  # type: deque[bytes]
        # offset of the first unconsumed byte in self._chunks[0]
        self._head = 0
        # leading chunks known to hold no terminator past self._head
        self._scanned = 0

    def __len__(self) -> int:
        return sum(len(chunk) for chunk in self._chunks) - self._head

    def append(self, data: bytes) -> None:
        if data:
            self._chunks.append(data)

    def next_line(self) -> Optional[LineView]:
        """
        Return the next complete line, or None if no terminator is buffered
        yet.
        """
        index = self._scanned
        while index < len(self._chunks):
            chunk = self._chunks[index]
            end = chunk.find(NEWLINE, self._head if index == 0 else 0)
            if end != -1:
                break
            index += 1
        else:
            self._scanned = index
            return None

        segments = []
        for _ in range(index):
            segments.append(memoryview(self._chunks.popleft())[self._head :])
            self._head = 0
        last = memoryview(chunk)[self._head : end]
        if len(last) or not segments:
            segments.append(last)

        self._head = end + 1
        if self._head == len(chunk):
            self._chunks.popleft()
            self._head = 0
        self._scanned = 0
        return LineView(segments)

    def remainder(self) -> Optional[LineView]:
        """
        Hand out whatever is left in the buffer as an unterminated line and
        empty the buffer. Returns None if nothing is left.
        """
        if not self._chunks:
            return None
        segments = [memoryview(self._chunks.popleft())[self._head :]]
        while self._chunks:
            segments.append(memoryview(self._chunks.popleft()))
        self._head = 0
        self._scanned = 0
        return LineView(segments)
