r"""
.. _bitio-dump:

``bitio-dump``
==============

A command-line utility which prints the contents of a binary file as a series
of fixed-width bit fields. It is mainly useful when debugging code which uses
:py:class:`bitio.BitWriter` to produce bit-packed data.

Usage
-----

In its simplest form, the file is displayed one byte per line::

    $ bitio-dump path/to/file.bin
    000000000000: 01000001  0x41
    000000000008: 01000000  0x40

The number at the start of each line is the offset (in bits) of the field
from the start of the file, followed by the field's bits and its value in
hexadecimal.

The ``--widths``/``-w`` argument gives a comma separated list of field widths
(1-64 bits) which are cycled through::

    $ bitio-dump path/to/file.bin --widths 1,7,2
    000000000000: 0  0x0
    000000000001: 1000001  0x41
    000000000008: 01  0x1
    000000000010: 0  0x0
    trailing bits at 000000000011: 0b00000 (5 bits)

If the file ends part way through a field, the remaining bits are shown on a
'trailing bits' line and the exit status is 1.

The ``--offset``/``-o`` argument gives a bit offset to start from (negative
values are relative to the end of the file) and ``--count``/``-n`` limits the
number of fields shown.

"""

import os
import sys
import logging

from argparse import ArgumentParser
from itertools import cycle

from bitio import __version__

from bitio.bits import MAX_BITS
from bitio.reader import BitReader
from bitio.string_formatters import Bin, Hex, Bits

__all__ = [
    "field_widths",
    "format_field_line",
    "format_trailing_line",
    "dump",
    "parse_args",
    "main",
]


def field_widths(string):
    """
    Parse a comma separated list of field widths, e.g. "1,7,2". Raises a
    :py:exc:`ValueError` if any width is not an integer between 1 and
    :py:data:`~bitio.bits.MAX_BITS`.
    """
    widths = [int(width) for width in string.split(",")]
    for width in widths:
        if not 1 <= width <= MAX_BITS:
            raise ValueError(
                "Field width {} not in range 1 to {}".format(width, MAX_BITS)
            )
    return widths


def format_field_line(offset, bits, value):
    """
    Format a line describing a 'bits'-bit field with the given value found at
    the given bit offset.
    """
    return "{:012d}: {}  {}".format(offset, Bin(bits, prefix="")(value), Hex()(value))


def format_trailing_line(offset, trailing_bits):
    """
    Format a line describing a :py:class:`bitarray.bitarray` of bits left over
    at the end of the file.
    """
    return "trailing bits at {:012d}: {}".format(offset, Bits()(trailing_bits))


def dump(reader, widths, total_bits, count=None, out=None):
    """
    Print fields read from a :py:class:`~bitio.BitReader`, cycling through the
    list of field widths given, until the end of the file or 'count' fields
    have been shown.

    Parameters
    ==========
    reader : :py:class:`~bitio.BitReader`
        A reader over a seekable file.
    widths : [int, ...]
    total_bits : int
        The length of the file in bits.
    count : int or None
    out : file or None
        The (text) file to print to. Defaults to stdout.

    Returns
    =======
    exit_code : int
        0 if the file ended on a field boundary (or 'count' fields were
        printed), 1 if bits were left over.
    """
    if out is None:
        out = sys.stdout

    for num, bits in enumerate(cycle(widths)):
        if count is not None and num >= count:
            break

        offset = reader.tell()
        remaining = total_bits - offset
        if remaining == 0:
            break
        elif remaining < bits:
            out.write(format_trailing_line(offset, reader.read_bitarray(remaining)))
            out.write("\n")
            logging.info("File ended %d bit(s) into a field", remaining)
            return 1

        out.write(format_field_line(offset, bits, reader.read_bits(bits)))
        out.write("\n")

    return 0


def parse_args(*args, **kwargs):
    """
    Parse a set of command line arguments. Returns a :py:mod:`argparse`
    ``args`` object with the following fields:

    * file (str): The filename of the file to display
    * offset (int): The bit offset to start from. If negative, relative to
      the end of the file.
    * widths (list of int): Field widths to cycle through.
    * count (int or None): Maximum number of fields to display.
    * verbose (int): Verbosity level
    """
    parser = ArgumentParser(
        description="""
        Display the contents of a binary file as a series of bit fields.
    """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    parser.add_argument(
        "file",
        help="""
            The filename of the file to display.
        """,
    )

    parser.add_argument(
        "--offset",
        "-o",
        type=int,
        default=0,
        help="""
            The bit offset to start displaying from. If negative, this is
            relative to the end of the file. Defaults to 0.
        """,
    )

    parser.add_argument(
        "--widths",
        "-w",
        type=field_widths,
        default=[8],
        help="""
            A comma separated list of field widths, in bits (1-{}), to cycle
            through. Defaults to 8.
        """.format(
            MAX_BITS
        ),
    )

    parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=None,
        help="""
            The maximum number of fields to display.
        """,
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="""
            Increase logging verbosity. May be given twice.
        """,
    )

    args = parser.parse_args(*args, **kwargs)

    if args.count is not None and args.count < 0:
        parser.error("--count must not be negative")

    return args


def main(*args, **kwargs):
    args = parse_args(*args, **kwargs)

    log_level = logging.WARNING
    if args.verbose >= 2:
        log_level = logging.DEBUG
    elif args.verbose >= 1:
        log_level = logging.INFO
    logging.basicConfig(level=log_level)

    total_bits = os.path.getsize(args.file) * 8
    if not -total_bits <= args.offset <= total_bits:
        sys.stderr.write(
            "Offset {} is outside of the file ({} bits long)\n".format(
                args.offset,
                total_bits,
            )
        )
        return 2

    with open(args.file, "rb") as f:
        reader = BitReader(f)
        if args.offset < 0:
            reader.seek_bits(args.offset, os.SEEK_END)
        else:
            reader.seek_bits(args.offset)

        logging.info("Displaying %s from bit %d", args.file, reader.tell())

        return dump(reader, args.widths, total_bits, args.count)


if __name__ == "__main__":
    sys.exit(main())
