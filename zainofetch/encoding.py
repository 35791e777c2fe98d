"""Little-endian byte reading and Zcash integer encodings."""

from __future__ import annotations

import struct
from collections.abc import Iterable

from zainofetch.errors import InvalidDataError, ParseError

MAX_COMPACT_SIZE = 0x02000000

_OP_0 = 0x00
_OP_1_NEGATE = 0x4F
_OP_1 = 0x51
_OP_16 = 0x60

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


class ByteReader:
    """A cursor over a byte string that raises on short reads."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.position = 0

    def __len__(self) -> int:
        return len(self.data) - self.position

    def remaining(self) -> bytes:
        """Return the bytes not yet consumed."""
        return self.data[self.position:]

    def skip(self, n: int, error_msg: str) -> None:
        """Advance past n bytes, raising InvalidDataError if there are too few."""
        if len(self.data) < self.position + n:
            raise InvalidDataError(error_msg)
        self.position += n

    def read(self, n: int, error_msg: str) -> bytes:
        """Consume and return n bytes, raising InvalidDataError if there are too few."""
        if len(self.data) < self.position + n:
            raise InvalidDataError(error_msg)
        chunk = self.data[self.position:self.position + n]
        self.position += n
        return chunk

    def _unpack(self, fmt: str, error_msg: str) -> int:
        size = struct.calcsize(fmt)
        return struct.unpack(fmt, self.read(size, error_msg))[0]

    def read_u32(self, error_msg: str) -> int:
        return self._unpack("<I", error_msg)

    def read_i32(self, error_msg: str) -> int:
        return self._unpack("<i", error_msg)

    def read_u64(self, error_msg: str) -> int:
        return self._unpack("<Q", error_msg)

    def read_bool(self, error_msg: str) -> bool:
        """Read one byte that must be 0 or 1."""
        byte = self.read(1, error_msg)[0]
        if byte == 0:
            return False
        if byte == 1:
            return True
        raise InvalidDataError(error_msg)

    def _read_raw(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        if len(self.data) < self.position + size:
            raise ParseError("failed to fill whole buffer")
        value = struct.unpack_from(fmt, self.data, self.position)[0]
        self.position += size
        return value

    def read_compact_size(self) -> int:
        """Read a canonical CompactSize integer no larger than MAX_COMPACT_SIZE."""
        flag = self._read_raw("<B")
        if flag < 253:
            value = flag
        elif flag == 253:
            value = self._read_raw("<H")
            if value < 253:
                raise ParseError("non-canonical CompactSize")
        elif flag == 254:
            value = self._read_raw("<I")
            if value < 0x10000:
                raise ParseError("non-canonical CompactSize")
        else:
            value = self._read_raw("<Q")
            if value < 0x100000000:
                raise ParseError("non-canonical CompactSize")
        if value > MAX_COMPACT_SIZE:
            raise ParseError("CompactSize too large")
        return value

    def read_script_i64(self) -> int:
        """Read an integer pushed in a script, as used for coinbase heights."""
        first = self.read(1, "Error reading first byte in i64 script hash")[0]
        if first == _OP_1_NEGATE:
            return -1
        if first == _OP_0:
            return 0
        if _OP_1 <= first <= _OP_16:
            return first - (_OP_1 - 1)
        raw = self.read(first, "Error reading i64 script hash")
        number = int.from_bytes(raw, "little") & 0xFFFFFFFFFFFFFFFF
        if number >= 1 << 63:
            number -= 1 << 64
        return number


def encode_compact_size(size: int) -> bytes:
    """Encode a non-negative integer in CompactSize form."""
    if size < 0 or size > 0xFFFFFFFFFFFFFFFF:
        raise ValueError(f"size {size} cannot be encoded as a CompactSize")
    if size < 253:
        return struct.pack("<B", size)
    if size <= 0xFFFF:
        return struct.pack("<BH", 253, size)
    if size <= 0xFFFFFFFF:
        return struct.pack("<BI", 254, size)
    return struct.pack("<BQ", 255, size)


def _txid_to_server(txid: str) -> bytes:
    raw = txid.encode("utf-8")
    pairs = [raw[i:i + 2] for i in range(0, len(raw), 2)]
    out = bytearray()
    for pair in reversed(pairs):
        if not all(ch in _HEX_DIGITS for ch in pair):
            raise ParseError(
                f"invalid digit found in {pair!r}", kind="Hex Parse Error"
            )
        out.append(int(pair, 16))
    return bytes(out)


def display_txids_to_server(txids: Iterable[str]) -> list[bytes]:
    """Turn big-endian hex txids into little-endian raw bytes."""
    return [_txid_to_server(txid) for txid in txids]