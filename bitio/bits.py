"""
The :py:mod:`bitio.bits` module contains the small amount of bit arithmetic
shared by :py:class:`~bitio.BitReader` and :py:class:`~bitio.BitWriter`.

Bits within a byte are always addressed MSB-first: intra-byte offset 0 is the
most significant bit (``0x80``) and offset 7 the least significant (``0x01``).

.. autodata:: MAX_BITS

.. autofunction:: mask

.. autofunction:: check_bit_count

The following utility functions convert between absolute bit offsets and
``(bytes, bits)`` pairs.

.. autofunction:: to_bit_offset

.. autofunction:: from_bit_offset
"""

from numbers import Integral

from bitio.exceptions import OutOfRangeError

__all__ = [
    "MAX_BITS",
    "mask",
    "check_bit_count",
    "to_bit_offset",
    "from_bit_offset",
]


MAX_BITS = 64
"""
The largest number of bits which may be passed to
:py:meth:`BitReader.read_bits` or :py:meth:`BitWriter.write_bits` in one
call.
"""


def mask(bits):
    """
    Return an integer with the lowest 'bits' bits set, e.g. ``mask(3) ==
    0b111``.
    """
    return (1 << bits) - 1


def check_bit_count(bits):
    """
    Check that 'bits' is a valid bit count for a single integer read or write,
    i.e. an integer in the range 0 to :py:data:`MAX_BITS` inclusive.

    Raises :py:exc:`OutOfRangeError` otherwise.
    """
    # NB: bool is an Integral but True/False are never meant as counts
    if not isinstance(bits, Integral) or isinstance(bits, bool):
        raise OutOfRangeError("Bit count must be an integer, not {!r}".format(bits))
    if not 0 <= bits <= MAX_BITS:
        raise OutOfRangeError(
            "Bit count {} not in range 0 to {}".format(bits, MAX_BITS)
        )


def to_bit_offset(bytes, bits=0):
    """
    Convert from a (bytes, bits) tuple into a total number of bits. ``bits``
    is the offset into the byte counting from the MSB (0) to the LSB (7).
    """
    return (bytes * 8) + bits


def from_bit_offset(total_bits):
    """
    Convert from a bit offset into a (bytes, bits) tuple. The inverse of
    :py:func:`to_bit_offset`.
    """
    return divmod(total_bits, 8)
