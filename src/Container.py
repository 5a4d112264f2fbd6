# Container.py

# =================================================================================================================

from __future__ import annotations
import os
import tempfile
from typing import Dict

from Container_Formats import *
from errors import TruncatedChartError
from utils import chart_to_bytes, chart_from_bytes

# =================================================================================================================

def serialize_container(payload: bytes, padding: int, width: int, table: Dict[int,int]) -> bytes:
    """Собирает контейнер: Header + Chart + Payload.

    Args:
        payload (bytes): упакованные коды
        padding (int): количество добитых нулевых бит (0..7)
        width (int): ширина кода
        table (Dict[int,int]): кодовая таблица {символ: код}

    Raises:
        WidthOverflowError: ширина не помещается в 1 байт
        ChartTooLargeError: таблица не помещается в uint32
        InvalidHeaderError: недопустимый padding или нулевая ширина

    Returns:
        bytes: непрерывный буфер контейнера
    """
    if width > MAX_WIDTH:
        raise WidthOverflowError(f"Code width {width} does not fit in one byte")

    chart_bin = chart_to_bytes(table, width)

    header = ContainerHeader(
        width       = width,
        padding     = padding,
        chart_size  = len(chart_bin)
    )

    return header.to_bytes() + chart_bin + bytes(payload)

def parse_container(blob: bytes) -> Container:
    """Разбирает контейнер на заголовок, таблицу {код: символ} и данные.

    Raises:
        TruncatedHeaderError: меньше 6 байт
        TruncatedChartError: таблица выходит за конец буфера
        MalformedChartError: таблица не разбирается
        InvalidHeaderError: повреждён байт ширины или padding
    """
    header = ContainerHeader.from_bytes(blob)

    chart_end = OFF_CHART + header.chart_size
    if chart_end > len(blob):
        raise TruncatedChartError(
            f"Chart needs {header.chart_size} bytes, only {len(blob) - OFF_CHART} available"
        )

    chart = chart_from_bytes(bytes(blob[OFF_CHART:chart_end]), header.width)

    return Container(
        header      = header,
        chart       = chart,
        payload     = bytes(blob[chart_end:])
    )

# =================================================================================================================

def read_bytes(path: str) -> bytes:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file '{path}' does not exist.")

    with open(path, "rb") as f:
        return f.read()

def read_text(path: str, encoding: str = "utf-8") -> str:
    """Читает текстовый файл без преобразования переводов строк."""
    return read_bytes(path).decode(encoding)

def write_bytes(path: str, data: bytes) -> None:
    """Атомарная запись: временный файл рядом с целевым и os.replace."""
    dir_path = os.path.dirname(os.path.abspath(path))  # Обрезка названия файла
    name = os.path.basename(path)                       # Выделение названия файла
    os.makedirs(dir_path, exist_ok=True)                # Создать директорию, если нет.

    fd, tmp = tempfile.mkstemp(dir=dir_path, prefix=name+".tmp_")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise

# =================================================================================================================

class ContainerWriter:
    """
    ContainerWriter: собирает контейнер из результата FixedCode.pack и записывает его в файл.
    """
    def __init__(self, path: str):
        self.path = path
        self.blob: bytes = b""

    def add_payload(self, payload: bytes, table: Dict[int,int], padding: int, width: int) -> bytes:
        self.blob = serialize_container(payload, padding, width, table)
        return self.blob

    def finalize(self) -> None:
        if not self.blob:
            raise RuntimeError("Container is empty: call add_payload() first")

        write_bytes(self.path, self.blob)

class ContainerReader:
    """
    ContainerReader: читает файл контейнера и разбирает заголовок, таблицу и данные.
    """
    def __init__(self, path: str):
        self.path = path
        self.size: int = 0
        self.container: Container

    def open(self) -> Container:
        blob = read_bytes(self.path)
        self.size = len(blob)
        self.container = parse_container(blob)
        return self.container

# End of module
