from .errors import TruncatedInput, UnexpectedTrailingElement


class ByteReader:  # Sequential reader over an in-memory buffer (no random access).
    def __init__(self, data):
        self.data = bytes(data)
        self.i = 0

    def remaining(self) -> int:
        return len(self.data) - self.i

    def peek(self, n: int) -> bytes:  # Next n bytes without consuming them.
        if n < 0 or self.i + n > len(self.data):
            raise TruncatedInput(f"need {n} bytes at offset {self.i}, only {self.remaining()} left")
        return self.data[self.i : self.i + n]

    def take(self, n: int) -> bytes:
        out = self.peek(n)
        self.i += n
        return out

    def u32_be(self) -> int:  # Big-endian u32 (external verifying-key counts).
        return int.from_bytes(self.take(4), "big")

    def expect_end(self, what="input"):  # Whole buffer consumed, else UnexpectedTrailingElement.
        if self.remaining():
            raise UnexpectedTrailingElement(f"{what}: {self.remaining()} trailing bytes at offset {self.i}")


class ByteWriter:  # Append-only byte sink mirroring ByteReader.
    def __init__(self):
        self.buf = bytearray()

    def write(self, data) -> "ByteWriter":
        self.buf += data
        return self

    def u32_be(self, v: int) -> "ByteWriter":
        return self.write(int(v).to_bytes(4, "big"))

    def getvalue(self) -> bytes:
        return bytes(self.buf)
