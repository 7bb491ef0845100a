r"""
The :py:mod:`bitio.string_formatters` module contains formatters for showing
bit-level values as strings.

A 'string formatter' is a callable which takes a value and returns a string
representation of it. For example::

    >>> from bitio.string_formatters import Bin

    >>> # A formatter for 7-bit fields
    >>> field_formatter = Bin(7)
    >>> field_formatter(0b101)
    '0b0000101'

"""

__all__ = [
    "Number",
    "Hex",
    "Bin",
    "Bits",
]


class Number:
    """
    A formatter for integers, built on :py:meth:`str.format`.

    Parameters
    ==========
    format_code : str
        A python :py:meth:`str.format` code, e.g. "b" for binary.
    num_digits : int
        The length to pad the number to.
    prefix : str
        A prefix to add before the formatted number.
    """

    def __init__(self, format_code, num_digits=0, prefix=""):
        self.format_code = format_code
        self.num_digits = num_digits
        self.prefix = prefix

    def __call__(self, number):
        return "{}{}{:0{}{}}".format(
            "-" if number < 0 else "",
            self.prefix,
            abs(number),
            self.num_digits,
            self.format_code,
        )


class Hex(Number):
    """Prints numbers in hexadecimal, prefixed with '0x' by default."""

    def __init__(self, num_digits=0, prefix="0x"):
        super().__init__("X", num_digits, prefix)


class Bin(Number):
    """Prints numbers in binary, prefixed with '0b' by default."""

    def __init__(self, num_digits=0, prefix="0b"):
        super().__init__("b", num_digits, prefix)


class Bits:
    """
    A formatter for :py:class:`bitarray.bitarray` objects. Shows the value as
    a string of the form '0b0101'.

    Parameters
    ==========
    prefix : str
        A prefix to add to the string
    show_length : bool
        If True, the length of the bitarray is shown in brackets afterwards.
    """

    def __init__(self, prefix="0b", show_length=True):
        self.prefix = prefix
        self.show_length = show_length

    def __call__(self, ba):
        string = "{}{}".format(self.prefix, ba.to01())
        if self.show_length:
            string += " ({} bit{})".format(len(ba), "s" if len(ba) != 1 else "")
        return string
