from typing import Dict, List, Tuple

from errors import *
from utils import *
from Container_Formats import MAX_WIDTH

"""Кодек равномерного (фиксированной длины) кода.

Каждый различный символ текста получает код одинаковой длины W = ceil(log2(|алфавит|)).
Это не оптимальный код Хаффмана: частоты символов не учитываются.

Поддерживает:
    - выделение алфавита в порядке первого появления символов
    - построение кодовой таблицы {символ: код}, коды 0, 1, 2, ... по порядку алфавита
    - кодирование текста в битовую последовательность и упаковку её в байты
    - декодирование по переданной таблице {код: символ}

Атрибуты:
    alphabet (List[int]): Алфавит текста (code points).
    width (int): Ширина кода W.
    table (Dict[int,int]): Кодовая таблица {символ: код}.

API:
    - FixedCode(): класс с методами pack/unpack.
"""

# =================================================================================================================

def extract_alphabet(text: str) -> List[int]:
    """Выделяет алфавит текста.

    Args:
        text (str): Входной текст.

    Raises:
        EmptyInputError: Если текст пустой.

    Returns:
        List[int]: Различные code points в порядке первого появления.
    """
    if not text:
        raise EmptyInputError("Input file is empty or contains no valid characters.")

    return list(dict.fromkeys(map(ord, text)))

def code_width(alphabet_size: int) -> int:
    """Ширина кода ceil(log2(k)), но не меньше 1 бита.
    Для алфавита из одного символа log2(1) = 0, и декодер не смог бы сдвинуться по потоку.
    """
    if alphabet_size < 1:
        raise EmptyInputError("Alphabet is empty")

    return max(1, (alphabet_size - 1).bit_length())

def build_code_table(alphabet: List[int]) -> Tuple[Dict[int,int], int]:
    """Строит кодовую таблицу фиксированной длины.

    Args:
        alphabet (List[int]): Алфавит в порядке первого появления.

    Raises:
        EmptyInputError: Если алфавит пуст.
        AlphabetTooLargeError: Если ширина кода не помещается в поле заголовка.

    Returns:
        tuple:
        - Dict[int,int]: {символ: код}
        - int: ширина кода W

    Пример:
        Вход: [97, 98, 99]
        Выход: ({97: 0, 98: 1, 99: 2}, 2)
    """
    width = code_width(len(alphabet))
    if width > MAX_WIDTH:
        raise AlphabetTooLargeError(f"Code width {width} exceeds maximum {MAX_WIDTH}")

    table = {symbol: code for code, symbol in enumerate(alphabet)}
    return table, width

def encode_symbols(text: str, table: Dict[int,int], width: int) -> List[int]:
    """Заменяет каждый символ текста его кодом.

    Args:
        text (str): Входной текст.
        table (Dict[int,int]): {символ: код}
        width (int): Ширина кода.

    Raises:
        UnmappedSymbolError: Если символа нет в таблице.

    Returns:
        List[int]: Битовая последовательность длиной width * len(text).
    """
    bits = []
    for ch in text:
        code = table.get(ord(ch))
        if code is None:
            raise UnmappedSymbolError(f"Symbol {ch!r} (U+{ord(ch):04X}) has no code in the chart")
        int_to_bits(bits, code, width)
    return bits

def decode_payload(payload: bytes, padding: int, chart: Dict[int,int], width: int) -> str:
    """Декодирует упакованные данные по таблице {код: символ}.

    Args:
        payload (bytes): Упакованные коды.
        padding (int): Число незначимых нулевых бит в конце.
        chart (Dict[int,int]): {код: символ}
        width (int): Ширина кода.

    Raises:
        InvalidHeaderError: Ширина 0 или padding больше длины данных.
        TrailingBitsError: Длина данных без padding не кратна ширине кода.
        UnknownCodeError: Код отсутствует в таблице.

    Returns:
        str: Восстановленный текст.
    """
    if width < 1:
        raise InvalidHeaderError("Code width must be at least 1 bit")

    bits = bytes_to_bits(payload)
    if padding > len(bits):
        raise InvalidHeaderError(f"Padding {padding} exceeds payload length {len(bits)} bits")

    total_bits = len(bits) - padding
    if total_bits % width:
        raise TrailingBitsError(
            f"{total_bits % width} trailing bits do not form a complete {width}-bit code"
        )

    out = []
    cur = 0
    cur_len = 0

    for bit in bits[:total_bits]:
        cur = (cur << 1) | bit
        cur_len += 1

        if cur_len == width:
            symbol = chart.get(cur)
            if symbol is None:
                raise UnknownCodeError(f"Invalid encoding for sequence: {cur:0{width}b}")
            out.append(chr(symbol))
            cur = 0
            cur_len = 0

    return _join_surrogates("".join(out))

def _join_surrogates(text: str) -> str:
    """Склеивает пары UTF-16 суррогатов в один символ.
    Таблицы, построенные по кодовым единицам UTF-16, хранят символ вне BMP как два символа.
    Одиночные суррогаты остаются как есть.
    """
    if not any("\ud800" <= ch <= "\udfff" for ch in text):
        return text

    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if "\ud800" <= ch <= "\udbff" and i + 1 < len(text) and "\udc00" <= text[i + 1] <= "\udfff":
            out.append(chr(0x10000 + ((ord(ch) - 0xD800) << 10) + (ord(text[i + 1]) - 0xDC00)))
            i += 2
        else:
            out.append(ch)
            i += 1

    return "".join(out)

def describe_chart(chart: Dict[int,int], width: int) -> List[Tuple[str, str]]:
    """Пары (код, символ) в порядке кодов для вывода в консоль."""
    return [(format(code, f"0{width}b"), repr(chr(symbol))) for code, symbol in sorted(chart.items())]

# =================================================================================================================

class FixedCode:
# -------------------------------------------------------------------------------------------------

    def __init__(self):
        """Инициализирует локальные СД
        """
        self.alphabet: List[int] = []
        self.width: int = 0
        self.table: Dict[int,int] = dict()

# -------------------------------------------------------------------------------------------------

    def pack(self, text: str) -> Tuple[bytes, Dict[int,int], int, int]:
        """Кодирует текст равномерным кодом.

        Args:
            text (str): Входной текст.

        Returns:
            tuple:
            - packed (bytes): Кодированные данные.
            - table (Dict[int,int]): Кодовая таблица {символ: код}.
            - padding (int): Количество незначимых бит в packed.
            - width (int): Ширина кода.
        """
        self.alphabet = extract_alphabet(text)
        self.table, self.width = build_code_table(self.alphabet)

        bits = encode_symbols(text, self.table, self.width)
        packed, padding = pack_bits(bits)
        return packed, dict(self.table), padding, self.width

    def unpack(self, data_bytes: bytes, chart: Dict[int,int], padding: int, width: int) -> str:
        """Декодирует байты, закодированные равномерным кодом.

        Args:
            data_bytes (bytes): Поток с закодированными значениями.
            chart (Dict[int,int]): Таблица {код: символ} из контейнера.
            padding (int): Число незначимых бит.
            width (int): Ширина кода.

        Returns:
            str: Декодированный текст.
        """
        self.width = width
        self.table = {symbol: code for code, symbol in chart.items()}
        self.alphabet = [symbol for _, symbol in sorted(chart.items())]

        return decode_payload(data_bytes, padding, chart, width)
