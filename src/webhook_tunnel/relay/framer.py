import codecs
from typing import AsyncIterable, AsyncIterator, List, Optional


class LineFramer:
    """Split a byte stream into newline-delimited text lines.

    Only the current unterminated line is buffered between reads. ``\\r\\n``
    is treated the same as ``\\n``.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._partial = ""

    def feed(self, chunk: bytes) -> List[str]:
        """Consume a chunk of bytes and return the lines it completes."""
        text = self._partial + self._decoder.decode(chunk)
        *lines, self._partial = text.split("\n")
        return [_strip_cr(line) for line in lines]

    def flush(self) -> Optional[str]:
        """Return the trailing unterminated line, if any, at end of stream."""
        rest = self._partial + self._decoder.decode(b"", final=True)
        self._partial = ""
        if not rest:
            return None
        return _strip_cr(rest)


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


async def iter_lines(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield text lines from an async byte stream until it is exhausted."""
    framer = LineFramer()
    async for chunk in chunks:
        for line in framer.feed(chunk):
            yield line

    last = framer.flush()
    if last is not None:
        yield last
