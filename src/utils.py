import json
from typing import List, Dict, Tuple

from errors import MalformedChartError

_BITS = frozenset("01")
MAX_CODE_POINT = 0x10FFFF

# =================================================================================================================

def chart_to_bytes(table: Dict[int,int], width: int) -> bytes:
    """Сериализует кодовую таблицу в компактный JSON.
    Ключ - код символа фиксированной длины, значение - двоичная запись его code point.
    Записи идут в порядке возрастания кодов.

    Args:
        table (Dict[int,int]): Кодовая таблица {символ: код}
        width (int): Ширина кода в битах

    Returns:
        bytes: JSON-объект в UTF-8.

    Пример:
        Вход: {97: 0, 98: 1, 99: 2}, width=2
        Выход: b'{"00":"1100001","01":"1100010","10":"1100011"}'
    """
    chart = {}
    for symbol, code in sorted(table.items(), key=lambda x: x[1]):
        chart[format(code, f"0{width}b")] = format(symbol, "b")
    return json.dumps(chart, separators=(",", ":")).encode("utf-8")

def chart_from_bytes(data: bytes, width: int) -> Dict[int,int]:
    """Десериализует кодовую таблицу из JSON.

    Обратная операция к chart_to_bytes, но результат развёрнут для декодирования: {код: символ}.

    Args:
        data (bytes): Область таблицы из контейнера.
        width (int): Ширина кода из заголовка.

    Raises:
        MalformedChartError: Если данные не являются таблицей "битовая строка -> битовая строка"
                             или не согласованы с шириной кода.

    Returns:
        Dict[int,int]: {код: символ}
    """
    try:
        chart = json.loads(data.decode("utf-8"))
    except (ValueError, RecursionError) as e:   # JSONDecodeError, UnicodeDecodeError, слишком глубокая вложенность
        raise MalformedChartError(f"Chart is not valid JSON: {e}") from e

    if not isinstance(chart, dict):
        raise MalformedChartError("Chart must be a JSON object")

    result = {}
    for code_b, symbol_b in chart.items():
        if len(code_b) != width or not set(code_b) <= _BITS:
            raise MalformedChartError(f"Invalid code {code_b!r} for width {width}")
        if not isinstance(symbol_b, str) or not symbol_b or not set(symbol_b) <= _BITS:
            raise MalformedChartError(f"Invalid symbol {symbol_b!r} for code {code_b}")
        symbol = int(symbol_b, 2)
        if symbol > MAX_CODE_POINT:
            raise MalformedChartError(f"Symbol {symbol_b} is out of Unicode range")
        result[int(code_b, 2)] = symbol

    # таблица должна быть биекцией
    if len(set(result.values())) != len(result):
        raise MalformedChartError("Chart maps several codes to one symbol")

    return result

# =================================================================================================================

def int_to_bits(bits: List[int], value: int, length: int):
    """Добавляет в битовый буфер двоичное представление числа фиксированной длины.

    Args:
        bits (List[int]): Целевой буфер битов.
        value (int): Число, из которого извлекаются биты.
        length (int): Количество записываемых бит (старшие первыми).
    """
    for i in range(length - 1, -1, -1):
        bits.append((value >> i)&1)        # захват i-того бита

def bits_to_bytes(bits: List[int]) -> bytes:
    """Преобразует массив битов в массив байтов (big-endian внутри байта).
    Неполный последний байт добивается нулями справа.

    Args:
        bits (List[int]): Список битов 0/1.

    Returns:
        bytes: Упакованные байты.
    """
    out = bytearray((len(bits)+7)//8)       # буфер с целым числом байт в большую сторону
    for i, bit in enumerate(bits):
        if bit:
            byte_id = i // 8                # счетчик байтов
            bit_id = 7 - (i % 8)            # счетчик битов
            out[byte_id] |= (1 << bit_id)

    return bytes(out)

def bytes_to_bits(b: bytes) -> List[int]:
    """Преобразует байты в последовательность битов.

    Args:
        b (bytes): Входные данные.

    Returns:
        List[int]: Список битов (0/1).
    """
    bits = []
    for byte in b:
        int_to_bits(bits, byte, 8)
    return bits

def pack_bits(bits: List[int]) -> Tuple[bytes, int]:
    """Выравнивает битовую последовательность до целого байта и упаковывает её.

    Args:
        bits (List[int]): Список битов 0/1.

    Returns:
        tuple:
        - bytes: Упакованные данные.
        - int: Количество добавленных нулевых бит (0..7).
    """
    padding = (8 - len(bits) % 8) % 8
    return bits_to_bytes(bits), padding
