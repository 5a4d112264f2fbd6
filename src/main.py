"""
CLI encoder:
Usage example:
  py src/main.py pack -i input.yml -o compressed.bin --stats --verbose
  py src/main.py unpack -i compressed.bin -o output.yml
  py src/main.py info -i compressed.bin
  py src/main.py verify -i compressed.bin

encoding: text encoding of input/output files (default utf-8, latin-1 for arbitrary bytes)
"""

# =================================================================================================================

import os
import sys

import cli

from FixedCode import FixedCode
from Container import *
from errors import CodecError

# =================================================================================================================

def compress_text(text: str) -> bytes:
    """Кодирует текст и возвращает готовый контейнер."""
    packed, table, padding, width = FixedCode().pack(text)
    return serialize_container(packed, padding, width, table)

def decompress_container(blob: bytes) -> str:
    """Разбирает контейнер и восстанавливает исходный текст."""
    container = parse_container(blob)
    return FixedCode().unpack(container.payload, container.chart, container.padding, container.width)

# =================================================================================================================

def pack_file(args):
    """Кодирует текстовый файл в контейнер."""
    if args.verbose:
        print("[pack] reading input:", args.input)

    text = read_text(args.input, args.encoding)

    fixed_code = FixedCode()
    packed, table, padding, width = fixed_code.pack(text)

    if args.verbose:
        print(f"[pack] alphabet: {len(table)} symbols, code width: {width} bits, padding: {padding}")

    writer = ContainerWriter(args.output)
    blob = writer.add_payload(packed, table, padding, width)
    writer.finalize()

    print(f"File compressed successfully to {args.output}")

    if args.stats:
        size = os.path.getsize(args.input)
        print("\n=== Statistics ===")
        print(f"• {os.path.basename(args.input)}: {size} bytes → {len(blob)} bytes")
        print(f"   Symbols:    {len(text)}")
        print(f"   Alphabet:   {len(table)}")
        print(f"   Code width: {width}")
        print(f"   Chart:      {len(blob) - HEADER_SIZE - len(packed)} bytes")
        print(f"   Payload:    {len(packed)} bytes")
        if size:
            print(f"   Ratio:      {len(blob) / size:.3f}")

def unpack_file(args):
    """Распаковывает контейнер в текстовый файл."""
    if args.verbose:
        print("[unpack] reading container:", args.input)

    reader = ContainerReader(args.input)
    container = reader.open()

    if args.verbose:
        print("[unpack] header:", container.header)

    text = FixedCode().unpack(container.payload, container.chart, container.padding, container.width)
    write_bytes(args.output, text.encode(args.encoding))

    print(f"Decompressed content successfully written to '{args.output}'.")

# =================================================================================================================

def main(argv=None) -> int:

    parser = cli.init()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (CodecError, UnicodeError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    return 0

# =================================================================================================================

if __name__ == "__main__":
    sys.exit(main())
