# Container_Formats.py
"""
Формат контейнера равномерного кода

Структура:
0         Width (1 byte)              uint8, ширина кода W
1         Padding (1 byte)            uint8, 0..7 добитых нулевых бит
2..5      ChartSize (4 bytes)         uint32 big-endian, размер кодовой таблицы
6..       Chart (ChartSize bytes)     JSON {код: code point}, оба в виде битовых строк
...       Payload (до конца)          коды, упакованные старшим битом вперёд

Примечания:
- Контрольной суммы нет: повреждение, дающее допустимые коды, не обнаруживается.
- Порядок байт фиксирован (big-endian) и не зависит от платформы.
"""
# =================================================================================================================

from __future__ import annotations
import struct
from dataclasses import dataclass, field
from typing import Dict

from errors import InvalidHeaderError, TruncatedHeaderError, WidthOverflowError, ChartTooLargeError

# =================================================================================================================

# lims
MAX_WIDTH               = 0xFF
MAX_PADDING             = 7
MAX_CHART_SIZE          = 0xFFFFFFFF

# =================================================================================================

# Header constants
HEADER_SIZE             = 6
BYTES_ORDER             = ">"
OFF_CHART               = HEADER_SIZE

# Offsets
H_OFF_WIDTH             = 0 # uint8
H_OFF_PADDING           = 1 # uint8
H_OFF_CHART_SIZE        = 2 # uint32

# =================================================================================================================

def _unpack(format, blob, offset):
    return struct.unpack_from(format, blob, offset)[0]

def _pack(format, blob, offset, data):
    struct.pack_into(format, blob, offset, data)

# =================================================================================================================

@dataclass(frozen=True)
class ContainerHeader:
    width: int                  = 1
    padding: int                = 0
    chart_size: int             = 0

    def to_bytes(self) -> bytes:
        """Сериализует заголовок в bytes длиной HEADER_SIZE (6 байт)"""

        if self.width > MAX_WIDTH:
            raise WidthOverflowError(f"Code width {self.width} does not fit in one byte")

        if self.chart_size > MAX_CHART_SIZE:
            raise ChartTooLargeError(f"Chart of {self.chart_size} bytes does not fit in uint32")

        self.validate_header()

        buf = bytearray(HEADER_SIZE)
        _pack("B", buf, H_OFF_WIDTH, self.width)
        _pack("B", buf, H_OFF_PADDING, self.padding)
        _pack(f"{BYTES_ORDER}I", buf, H_OFF_CHART_SIZE, self.chart_size)

        return bytes(buf)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ContainerHeader":
        """Парсит первые 6 байт контейнера и возвращает ContainerHeader."""

        if len(data) < HEADER_SIZE:
            raise TruncatedHeaderError(
                f"Container too small: {len(data)} bytes, header needs {HEADER_SIZE}"
            )

        H = cls(
            width           = data[H_OFF_WIDTH],
            padding         = data[H_OFF_PADDING],
            chart_size      = _unpack(f"{BYTES_ORDER}I", data, H_OFF_CHART_SIZE),
        )
        H.validate_header()

        return H

    def validate_header(self):
        if self.width < 1:
            raise InvalidHeaderError("Code width must be at least 1 bit")

        if not 0 <= self.padding <= MAX_PADDING:
            raise InvalidHeaderError(f"Padding {self.padding} is out of range 0..{MAX_PADDING}")

# =================================================================================================================

@dataclass(frozen=True)
class Container:
    header: ContainerHeader
    chart: Dict[int, int]       = field(default_factory=dict)     # {код: символ}
    payload: bytes              = b""

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def padding(self) -> int:
        return self.header.padding

# =================================================================================================================
