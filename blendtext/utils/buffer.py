"""
In-memory byte buffer with a cursor and fixed byte order.
"""

import struct


class MemoryBuffer:
    """Read-only cursor over a bytes-like object.

    All multi-byte reads use ``byte_order`` ('<' or '>'), so callers never
    pass endianness around once the buffer is created.
    """

    def __init__(self, data: bytes | bytearray | memoryview, byte_order: str = "<"):
        if byte_order not in ("<", ">"):
            raise ValueError(f"Invalid byte order {byte_order!r}")
        self._data = memoryview(data).cast("B")
        self._offset = 0
        self.byte_order = byte_order

    def __len__(self):
        return len(self._data)

    def size(self) -> int:
        return len(self._data)

    def tell(self) -> int:
        return self._offset

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def seek(self, offset: int) -> None:
        if not 0 <= offset <= len(self._data):
            raise BufferError(f"Seek to {offset} outside buffer of size {len(self._data)}")
        self._offset = offset

    def skip(self, count: int) -> None:
        self.seek(self._offset + count)

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = self.remaining()
        if size > self.remaining():
            raise BufferError(f"Read of {size} bytes at {self._offset} past end of buffer")
        data = self._data[self._offset:self._offset + size].tobytes()
        self._offset += size
        return data

    def read_fmt(self, fmt: str) -> tuple:
        fmt = self.byte_order + fmt
        return struct.unpack(fmt, self.read(struct.calcsize(fmt)))

    def read_int32(self) -> int:
        return self.read_fmt("i")[0]

    def read_ascii_string(self, length: int) -> str:
        return self.read(length).decode("ascii", errors="replace")
