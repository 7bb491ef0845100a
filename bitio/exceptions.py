"""
:py:mod:`bitio.exceptions`
==========================

Custom exception types raised by :py:class:`~bitio.BitReader` and
:py:class:`~bitio.BitWriter`.

Errors raised by the wrapped file objects themselves (e.g. :py:exc:`OSError`)
are never wrapped and propagate unchanged.
"""

__all__ = [
    "OutOfRangeError",
    "EndOfStreamError",
]


class OutOfRangeError(ValueError):
    """
    Thrown whenever an out-of-range argument is passed to a bit reading or
    writing function, for example a bit count larger than
    :py:data:`bitio.bits.MAX_BITS` or a bit value other than 0 or 1.
    """


class EndOfStreamError(EOFError):
    """
    Thrown by :py:class:`~bitio.BitReader` when the underlying file has no
    more bytes to give.

    This is deliberately an :py:exc:`EOFError` and not an :py:exc:`OSError`
    so that running out of data can be told apart from a failing file.
    """
