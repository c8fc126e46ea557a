"""
Wire field types

Little-endian fixed-width primitives shared by instruction payloads and
account records.
"""

import struct
from typing import Any

from solders.pubkey import Pubkey

from ..errors import InvalidArgument
from ..utils.address import PUBKEY_LENGTH, pubkey_to_string, to_pubkey


class FieldType:
    """Base class for a fixed-width wire type"""

    name: str = ""
    size: int = 0

    def encode_into(self, buffer: bytearray, offset: int, value: Any, field: str) -> None:
        raise NotImplementedError

    def decode_from(self, data: bytes, offset: int) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return self.name


class IntType(FieldType):
    """
    Unsigned or signed integer.

    Widths up to 64 bits go through struct; 128-bit values use int.to_bytes.
    """

    _FORMATS = {
        (1, False): "<B",
        (2, False): "<H",
        (4, False): "<I",
        (8, False): "<Q",
        (8, True): "<q",
    }

    def __init__(self, name: str, size: int, signed: bool = False):
        self.name = name
        self.size = size
        self.signed = signed
        self._format = self._FORMATS.get((size, signed))
        bits = size * 8
        if signed:
            self.min_value = -(1 << (bits - 1))
            self.max_value = (1 << (bits - 1)) - 1
        else:
            self.min_value = 0
            self.max_value = (1 << bits) - 1

    def encode_into(self, buffer: bytearray, offset: int, value: Any, field: str) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{field} must be an integer, got {value!r}", field, value)
        if not self.min_value <= value <= self.max_value:
            raise InvalidArgument.out_of_range(field, value, self.name)
        if self._format:
            struct.pack_into(self._format, buffer, offset, value)
        else:
            buffer[offset:offset + self.size] = value.to_bytes(self.size, "little", signed=self.signed)

    def decode_from(self, data: bytes, offset: int) -> int:
        if self._format:
            return struct.unpack_from(self._format, data, offset)[0]
        return int.from_bytes(data[offset:offset + self.size], "little", signed=self.signed)


class BoolType(FieldType):
    """Single byte, any non-zero value decodes as True"""

    name = "bool"
    size = 1

    def encode_into(self, buffer: bytearray, offset: int, value: Any, field: str) -> None:
        if not isinstance(value, (bool, int)) or value not in (0, 1):
            raise InvalidArgument.out_of_range(field, value, self.name)
        buffer[offset] = 1 if value else 0

    def decode_from(self, data: bytes, offset: int) -> bool:
        return data[offset] != 0


class PubkeyType(FieldType):
    """32-byte account key, decoded to base58"""

    name = "pub"
    size = PUBKEY_LENGTH

    def encode_into(self, buffer: bytearray, offset: int, value: Any, field: str) -> None:
        if not isinstance(value, (str, bytes, bytearray, Pubkey)):
            raise InvalidArgument.bad_address(value)
        buffer[offset:offset + self.size] = bytes(to_pubkey(value))

    def decode_from(self, data: bytes, offset: int) -> str:
        return pubkey_to_string(bytes(data[offset:offset + self.size]))


class ArrayType(FieldType):
    """Fixed-length array of a single item type"""

    def __init__(self, item: FieldType, count: int):
        self.item = item
        self.count = count
        self.name = f"[{item.name}; {count}]"
        self.size = item.size * count

    def encode_into(self, buffer: bytearray, offset: int, value: Any, field: str) -> None:
        if not isinstance(value, (list, tuple)) or len(value) != self.count:
            raise InvalidArgument(f"{field} must hold exactly {self.count} items", field, value)
        for index, item in enumerate(value):
            self.item.encode_into(buffer, offset + index * self.item.size, item, f"{field}[{index}]")

    def decode_from(self, data: bytes, offset: int) -> list:
        return [
            self.item.decode_from(data, offset + index * self.item.size)
            for index in range(self.count)
        ]


u8 = IntType("u8", 1)
u16 = IntType("u16", 2)
u32 = IntType("u32", 4)
u64 = IntType("u64", 8)
i64 = IntType("i64", 8, signed=True)
u128 = IntType("u128", 16)
i128 = IntType("i128", 16, signed=True)
bool_ = BoolType()
pub = PubkeyType()


def array(item: FieldType, count: int) -> ArrayType:
    return ArrayType(item, count)
