
import argparse

import main
from FixedCode import FixedCode, describe_chart
from Container import ContainerReader

# =================================================================================================================

DEFAULT_INPUT           = "input.yml"
DEFAULT_CONTAINER       = "compressed.bin"
DEFAULT_OUTPUT          = "output.yml"
DEFAULT_ENCODING        = "utf-8"

# =================================================================================================================

def init() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixcode",
        description="Text codec with fixed-length symbol codes"
    )
    sub = parser.add_subparsers(dest="cmd")

    # ------------------------------------------------------------
    # pack
    # ------------------------------------------------------------
    p = sub.add_parser("pack", help="Закодировать текстовый файл")
    p.add_argument("-i", "--input", default=DEFAULT_INPUT)
    p.add_argument("-o", "--output", default=DEFAULT_CONTAINER)
    p.add_argument("--encoding", default=DEFAULT_ENCODING, help="Кодировка входного файла. Default utf-8")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--stats", action="store_true")
    p.set_defaults(func=main.pack_file)

    # ------------------------------------------------------------
    # unpack
    # ------------------------------------------------------------
    u = sub.add_parser("unpack", help="Раскодировать контейнер")
    u.add_argument("-i", "--input", default=DEFAULT_CONTAINER)
    u.add_argument("-o", "--output", default=DEFAULT_OUTPUT)
    u.add_argument("--encoding", default=DEFAULT_ENCODING, help="Кодировка выходного файла. Default utf-8")
    u.add_argument("--verbose", action="store_true")
    u.set_defaults(func=main.unpack_file)

    # ------------------------------------------------------------
    # info
    # ------------------------------------------------------------
    t = sub.add_parser("info", help="Показать информацию о контейнере")
    t.add_argument("-i", "--input", default=DEFAULT_CONTAINER)
    t.set_defaults(func=info_mode)

    # ------------------------------------------------------------
    # verify
    # ------------------------------------------------------------
    v = sub.add_parser("verify", help="Проверить, что контейнер декодируется")
    v.add_argument("-i", "--input", default=DEFAULT_CONTAINER)
    v.set_defaults(func=verify_mode)

    return parser

# =================================================================================================================

def info_mode(args):
    """Печатает заголовок и кодовую таблицу контейнера."""
    print("[info] Analyzing:", args.input)
    reader = ContainerReader(args.input)
    container = reader.open()

    print("Container header:")
    print(f"   Code width:    {container.width}")
    print(f"   Padding:       {container.padding}")
    print(f"   Chart size:    {container.header.chart_size}")
    print(f"   Payload size:  {len(container.payload)}")
    print(f"   Total size:    {reader.size}")

    print("\nChart:")
    for code, symbol in describe_chart(container.chart, container.width):
        print(f" • {code} -> {symbol}")

def verify_mode(args):
    """Проверяет контейнер без записи результата."""
    print("[verify]", args.input)
    reader = ContainerReader(args.input)
    container = reader.open()

    text = FixedCode().unpack(container.payload, container.chart, container.padding, container.width)
    print(f"OK: {len(text)} symbols decoded")
