"""Иерархия ошибок кодека.

    CodecError
    ├── InputError      - нечего кодировать / символ вне таблицы
    ├── FormatError     - повреждённый или чужой контейнер
    └── CapacityError   - значение не помещается в поле формата

Ошибки файловой системы не оборачиваются: наружу уходят стандартные OSError.
"""

# =================================================================================================================

class CodecError(ValueError):
    pass

# =================================================================================================================

class InputError(CodecError):
    pass


class EmptyInputError(InputError):
    pass


class UnmappedSymbolError(InputError):
    pass

# =================================================================================================================

class FormatError(CodecError):
    pass


class TruncatedHeaderError(FormatError):
    pass


class TruncatedChartError(FormatError):
    pass


class MalformedChartError(FormatError):
    pass


class InvalidHeaderError(FormatError):
    pass


class UnknownCodeError(FormatError):
    pass


class TrailingBitsError(FormatError):
    pass

# =================================================================================================================

class CapacityError(CodecError):
    pass


class AlphabetTooLargeError(CapacityError):
    pass


class WidthOverflowError(CapacityError):
    pass


class ChartTooLargeError(CapacityError):
    pass
