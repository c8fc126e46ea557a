"""
Fixed-size record layout

An ordered list of named fields with a span computed once at construction.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..errors import InvalidArgument, LengthMismatch, LayoutError
from .fields import FieldType


class Struct:
    """
    Ordered record of fixed-width fields

    Usage:
        layout = Struct("ticket", [("owner", pub), ("amount", u64)])
        data = layout.encode({"owner": "...", "amount": 10})
        layout.decode(data)  # {"owner": "...", "amount": 10}
    """

    def __init__(self, name: str, fields: Iterable[Tuple[str, FieldType]]):
        self.name = name
        self.fields: List[Tuple[str, FieldType]] = list(fields)

        seen = set()
        for field_name, field_type in self.fields:
            if field_name in seen:
                raise LayoutError.duplicate(name, "field", field_name)
            if not isinstance(field_type, FieldType):
                raise LayoutError(f"{name}.{field_name}: not a field type: {field_type!r}", name)
            seen.add(field_name)

        self.span = sum(field_type.size for _, field_type in self.fields)

    @property
    def field_names(self) -> List[str]:
        return [field_name for field_name, _ in self.fields]

    def encode_into(self, buffer: bytearray, offset: int, values: Mapping[str, Any]) -> None:
        for field_name, field_type in self.fields:
            if field_name not in values:
                raise InvalidArgument.missing_field(self.name, field_name)
            field_type.encode_into(buffer, offset, values[field_name], field_name)
            offset += field_type.size

    def encode(self, values: Optional[Mapping[str, Any]] = None) -> bytes:
        """
        Serialize values into exactly span bytes.

        Raises:
            InvalidArgument: If a field is missing or out of range
        """
        buffer = bytearray(self.span)
        self.encode_into(buffer, 0, values or {})
        return bytes(buffer)

    def decode_from(self, data: bytes, offset: int = 0) -> Dict[str, Any]:
        record = {}
        for field_name, field_type in self.fields:
            record[field_name] = field_type.decode_from(data, offset)
            offset += field_type.size
        return record

    def decode(self, data: bytes) -> Dict[str, Any]:
        """
        Deserialize a buffer of exactly span bytes.

        Raises:
            LengthMismatch: If len(data) != span
        """
        if len(data) != self.span:
            raise LengthMismatch.for_layout(self.name, self.span, len(data))
        return self.decode_from(data)

    def __repr__(self) -> str:
        return f"Struct({self.name}, span={self.span})"
