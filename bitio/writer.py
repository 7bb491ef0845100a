"""
The :py:mod:`bitio.writer` module contains :py:class:`BitWriter`, a wrapper
for binary file-like objects which allows data to be written one bit (or a few
bits) at a time.

Bits are packed MSB-first: the first bit written to a byte becomes its most
significant bit. Complete bytes are written to the underlying file as soon as
they are filled. A trailing partial byte is only written when
:py:meth:`BitWriter.flush` (or :py:meth:`BitWriter.flush_bits`) is called, at
which point it is padded with zeros::

    >>> from io import BytesIO
    >>> f = BytesIO()
    >>> w = BitWriter(f)
    >>> w.write_bit(1)
    1
    >>> w.write_bits(3, 0b011)
    3
    >>> w.flush()  # Returns the number of padding bits added
    4
    >>> f.getvalue()
    b'\\xb0'

.. autoclass:: BitWriter
    :members:

"""

import logging

from bitarray import bitarray
from bitarray.util import ba2int

from bitio.bits import MAX_BITS, mask, check_bit_count

from bitio.exceptions import OutOfRangeError

__all__ = [
    "BitWriter",
]


class BitWriter:
    """
    A binary file which may be written one bit at a time.

    The :py:class:`BitWriter` takes exclusive ownership of the file it wraps
    until :py:meth:`into_inner` is called. Most unbuffered files should be
    wrapped in a :py:class:`io.BufferedWriter` first to avoid lots of
    single-byte writes.

    .. warning::

        :py:meth:`flush` must be called before :py:meth:`into_inner` or before
        the writer is discarded, otherwise up to 7 buffered bits will be lost.
    """

    def __init__(self, file):
        """
        Parameters
        ==========
        file : A Python 'file' object in binary-write mode.
        """
        self._file = file

        # The bits written into the current (incomplete) byte so far, right
        # aligned. Only the lowest self._bits_pending bits are meaningful.
        self._current_byte = 0

        # Number of bits in self._current_byte (0-7)
        self._bits_pending = 0

    def _check_attached(self):
        if self._file is None:
            raise ValueError("BitWriter has been detached from its file")

    def _write_all(self, data):
        """
        Internal method. Write all of 'data' to the file, retrying after short
        writes (e.g. from a raw, unbuffered file).
        """
        data = bytes(data)
        while data:
            written = self._file.write(data)

            # Some file-like objects return None when the whole buffer was
            # accepted
            if written is None:
                break
            if written == 0:
                raise OSError("Failed to write whole buffer to file")

            data = data[written:]

    @property
    def file(self):
        """
        The underlying file object. Call :py:meth:`flush` before writing to it
        directly or buffered bits will end up after the newly written data.
        """
        return self._file

    @property
    def bits_pending(self):
        """
        The number of bits written into the current, incomplete, byte which
        have not yet been passed to the underlying file (0-7).
        """
        return self._bits_pending

    def write_bit(self, value):
        """
        Write a single bit (0 or 1) into the stream. Returns the number of bits
        written (always 1).

        Raises :py:exc:`OutOfRangeError` if 'value' is not 0 or 1.
        """
        if value not in (0, 1):
            raise OutOfRangeError("{!r} is not a bit value (0 or 1)".format(value))

        return self.write_bits(1, int(value))

    def write_bits(self, bits, value):
        """
        Write the 'bits' lowest-order bits of 'value', most significant bit
        first. Any higher-order bits of 'value' are ignored. Returns the number
        of bits written.

        Raises :py:exc:`OutOfRangeError` if 'bits' is not in the range 0 to
        :py:data:`~bitio.bits.MAX_BITS`.

        If the underlying file raises an exception, the bits passed to the
        failing call are not retained.
        """
        check_bit_count(bits)
        self._check_attached()

        value &= mask(bits)

        current_byte = self._current_byte
        bits_pending = self._bits_pending
        remaining = bits
        out = bytearray()

        # Complete the partially filled byte
        free = 8 - bits_pending
        if bits_pending and remaining >= free:
            remaining -= free
            out.append((current_byte << free) | (value >> remaining))
            current_byte = 0
            bits_pending = 0

        while remaining >= 8:
            remaining -= 8
            out.append((value >> remaining) & 0xFF)

        current_byte = (current_byte << remaining) | (value & mask(remaining))
        bits_pending += remaining

        if out:
            self._write_all(out)

        self._current_byte = current_byte
        self._bits_pending = bits_pending

        return bits

    def write_bitarray(self, value):
        """
        Write every bit of the :py:class:`bitarray.bitarray` 'value', in order.
        Unlike :py:meth:`write_bits`, there is no limit on the length. Returns
        the number of bits written.

        Bits are written in index order whatever the bitarray's endianness.
        """
        # ba2int honours endianness so normalise to big-endian first
        value = bitarray(value, endian="big")

        for start in range(0, len(value), MAX_BITS):
            chunk = value[start : start + MAX_BITS]
            self.write_bits(len(chunk), ba2int(chunk))

        return len(value)

    def write_bytes(self, data):
        """
        Write the provided :py:class:`bytes` or :py:class:`bytearray` as a
        series of 8-bit values, starting at the current bit position (which
        need not be byte aligned). Returns the number of bits written.
        """
        data = bytes(data)

        if self._bits_pending == 0:
            self._check_attached()
            self._write_all(data)
        else:
            for byte in data:
                self.write_bits(8, byte)

        return len(data) * 8

    def flush_bits(self):
        """
        Write out any incomplete byte, padding its unused low-order bits with
        zeros. Returns the number of padding bits added (0 if no bits were
        pending, in which case nothing is written).

        Unlike :py:meth:`flush`, the underlying file's own ``flush()`` is not
        called.
        """
        self._check_attached()

        if self._bits_pending == 0:
            return 0

        padding = 8 - self._bits_pending
        self._write_all(bytearray([(self._current_byte << padding) & 0xFF]))
        self._current_byte = 0
        self._bits_pending = 0

        logging.debug("flush_bits: added %d padding bit(s)", padding)

        return padding

    def flush(self):
        """
        Write out any incomplete byte (see :py:meth:`flush_bits`) and flush the
        underlying file. Returns the number of padding bits added.

        The total number of bits written plus the padding returned by this
        method is always a multiple of 8.
        """
        padding = self.flush_bits()

        flush = getattr(self._file, "flush", None)
        if flush is not None:
            flush()

        return padding

    def into_inner(self):
        """
        Detach and return the underlying file. The :py:class:`BitWriter` may
        not be used afterwards.

        This does *not* flush: any pending bits are discarded. Call
        :py:meth:`flush` first if this is undesirable.
        """
        self._check_attached()

        if self._bits_pending:
            logging.debug(
                "into_inner: discarding %d unflushed bit(s)", self._bits_pending
            )

        file = self._file
        self._file = None
        self._current_byte = 0
        self._bits_pending = 0

        return file
