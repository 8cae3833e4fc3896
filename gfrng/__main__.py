"""
gfrng Command Line Interface

Usage:
    python -m gfrng fields                      # List predefined fields
    python -m gfrng calc mul 0x03 0x07          # Field arithmetic on encodings
    python -m gfrng generate -n 16 ...          # Emit CRS output bytes

Examples:
    # Order-2 CRS over GF(2^8), 32 bytes as hex
    python -m gfrng generate -n 32 --constant 1 --coeffs 2 3 --initial 5 9

    # Same sequence written to a file
    python -m gfrng generate -n 4096 --constant 1 --coeffs 2 3 \\
        --initial 5 9 -o random.bin

    # Inverse of 0x53 in GF(2^16)
    python -m gfrng calc inv 0x53 --field GF2_16
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from . import __version__, BINARY_FIELDS, DEFAULT_FIELD, MAX_ORDER


def _int(text: str) -> int:
    """Parse decimal, 0x hex or 0b binary integers."""
    return int(text, 0)


def cmd_fields(args: argparse.Namespace) -> int:
    """Show predefined fields."""
    from .GaloisField import FIELDS

    table = Table(title="Predefined fields")
    table.add_column("Name")
    table.add_column("p", justify="right")
    table.add_column("n", justify="right")
    table.add_column("Order", justify="right")
    table.add_column("Modulus")

    for name, gf in FIELDS.items():
        table.add_row(name, str(gf.p), str(gf.degree), f"{gf.order:,}", str(gf.modulus))

    Console().print(table)
    return 0


def cmd_calc(args: argparse.Namespace) -> int:
    """Field arithmetic on integer encodings."""
    from .GaloisField import get_field

    gf = get_field(args.field)
    width = (gf.degree + 3) // 4

    try:
        a = gf.from_int(args.a)
        if args.op in ('inv', 'neg'):
            result = a.inverse() if args.op == 'inv' else -a
        else:
            if args.b is None:
                print(f"Error: '{args.op}' needs two operands", file=sys.stderr)
                return 1
            b = gf.from_int(args.b)
            ops = {
                'add': gf.add,
                'sub': gf.subtract,
                'mul': gf.multiply,
                'div': gf.divide,
            }
            result = ops[args.op](a, b)
    except (ValueError, ZeroDivisionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"0x{int(result):0{width}X}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """Emit CRS output."""
    from .Generator import GeneratorConfig, RecurrenceGenerator
    from .Device import RandomDevice

    try:
        config = GeneratorConfig.from_args(args)
        device = RandomDevice(RecurrenceGenerator(config))
        with device:
            data = device.read(args.count)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        path = Path(args.output)
        path.write_bytes(data)
        print(f"Wrote {len(data):,} bytes to {path}")
    elif args.format == 'raw':
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    elif args.format == 'table':
        table = Table(title=f"CRS output ({config.field_name}, order {config.order})")
        table.add_column("Offset", justify="right")
        table.add_column("Hex")
        for offset in range(0, len(data), 16):
            table.add_row(f"{offset:08X}", data[offset:offset + 16].hex(' '))
        Console().print(table)
    else:
        print(data.hex())

    if args.verbose:
        console = Console(stderr=True)
        for timestamp, level, message in device.get_log_messages(100):
            stamp = datetime.fromtimestamp(timestamp).strftime('%H:%M:%S')
            console.print(f"[dim]{stamp}[/dim] {level:5} {message}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='gfrng',
        description='gfrng - Finite field arithmetic and CRS generator',
    )
    parser.add_argument('--version', action='version',
                        version=f'gfrng {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Fields command
    subparsers.add_parser('fields', help='List predefined fields')

    # Calc command
    calc_parser = subparsers.add_parser('calc', help='Arithmetic on field elements')
    calc_parser.add_argument('op', choices=['add', 'sub', 'mul', 'div', 'inv', 'neg'],
                             help='Operation')
    calc_parser.add_argument('a', type=_int, help='First operand (integer encoding)')
    calc_parser.add_argument('b', type=_int, nargs='?', help='Second operand')
    calc_parser.add_argument('--field', choices=list(BINARY_FIELDS), default=DEFAULT_FIELD,
                             help=f'Field (default: {DEFAULT_FIELD})')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate CRS output bytes')
    gen_parser.add_argument('-n', '--count', type=int, default=16,
                            help='Number of bytes (default: 16)')
    gen_parser.add_argument('-o', '--output', help='Output file')
    gen_parser.add_argument('--field', choices=list(BINARY_FIELDS), default=DEFAULT_FIELD,
                            help=f'Field (default: {DEFAULT_FIELD})')
    gen_parser.add_argument('--order', type=int,
                            help=f'CRS order 1-{MAX_ORDER} (default: number of coefficients)')
    gen_parser.add_argument('--constant', type=_int, default=0,
                            help='CRS constant (default: 0)')
    gen_parser.add_argument('--coeffs', type=_int, nargs='+', required=True,
                            help='CRS coefficients')
    gen_parser.add_argument('--initial', type=_int, nargs='+', required=True,
                            help='Initial values, oldest first')
    gen_parser.add_argument('--format', choices=['hex', 'raw', 'table'], default='hex',
                            help='Stdout format (default: hex)')
    gen_parser.add_argument('-v', '--verbose', action='store_true',
                            help='Show device events')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        'fields': cmd_fields,
        'calc': cmd_calc,
        'generate': cmd_generate,
    }

    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
