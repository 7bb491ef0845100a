"""
The :py:mod:`bitio.reader` module contains :py:class:`BitReader`, a wrapper
for binary file-like objects which allows data to be read one bit (or a few
bits) at a time.

Bytes are read from the underlying file lazily, one at a time, and only when
all of the bits of the previous byte have been consumed. Bits are returned
MSB-first::

    >>> from io import BytesIO
    >>> r = BitReader(BytesIO(b"\\xA5"))
    >>> r.read_bit()
    1
    >>> bin(r.read_bits(3))
    '0b10'
    >>> r.tell()
    4

When the wrapped file is seekable, :py:meth:`BitReader.seek_bits` and
:py:meth:`BitReader.tell` allow arbitrary bit positions to be visited.

.. autoclass:: BitReader
    :members:

"""

import logging

from io import UnsupportedOperation
from os import SEEK_SET, SEEK_CUR, SEEK_END

from bitarray import bitarray
from bitarray.util import int2ba

from bitio.bits import (
    MAX_BITS,
    mask,
    check_bit_count,
    to_bit_offset,
    from_bit_offset,
)

from bitio.exceptions import EndOfStreamError

__all__ = [
    "BitReader",
]


class BitReader:
    """
    A binary file which may be read one bit at a time.

    When the end of the file is reached, reads raise
    :py:exc:`~bitio.exceptions.EndOfStreamError`.

    The :py:class:`BitReader` takes exclusive ownership of the file it wraps
    until :py:meth:`into_inner` is called. Most unbuffered files should be
    wrapped in a :py:class:`io.BufferedReader` first to avoid lots of
    single-byte reads.

    .. note::

        Multi-bit reads are not atomic. If the end of the file is reached
        part-way through a :py:meth:`read_bits` call, the bits read up to that
        point are lost and the reader is left positioned after the last byte
        it managed to read.
    """

    def __init__(self, file):
        """
        Parameters
        ==========
        file : A Python 'file' object in binary-read mode.
        """
        self._file = file

        # The unconsumed bits of the most recently read byte, right aligned.
        self._current_byte = 0

        # Number of unconsumed bits in self._current_byte (0-8)
        self._bits_pending = 0

        seekable = getattr(file, "seekable", None)
        self._seekable = bool(seekable()) if seekable is not None else False

        # The offset (in bits) of the next bit to be read, or None if the file
        # is not seekable.
        self._bit_position = file.tell() * 8 if self._seekable else None

    def _check_attached(self):
        if self._file is None:
            raise ValueError("BitReader has been detached from its file")

    def _require_seekable(self):
        if not self._seekable:
            raise UnsupportedOperation(
                "This operation can only be performed on seekable files"
            )

    def _read_byte(self):
        """Internal method. Load the next byte from the file."""
        byte = self._file.read(1)
        if not byte:
            raise EndOfStreamError("End of stream reached")

        self._current_byte = byte[0]
        self._bits_pending = 8

    def _advance(self, bits):
        if self._bit_position is not None:
            self._bit_position += bits

    @property
    def file(self):
        """
        The underlying file object. If the file position is changed directly,
        call :py:meth:`reset` before reading again.
        """
        return self._file

    @property
    def bits_pending(self):
        """
        The number of bits already loaded from the file but not yet read
        (0-7 between calls).
        """
        return self._bits_pending

    def seekable(self):
        """
        True if the underlying file supports seeking and so
        :py:meth:`seek_bits` and :py:meth:`tell` may be used.
        """
        return self._seekable

    def read_bit(self):
        """
        Read and return the next bit in the stream (0 or 1).
        """
        return self.read_bits(1)

    def read_bits(self, bits):
        """
        Read a 'bits'-bit unsigned integer, most significant bit first.
        Reading 0 bits returns 0 and consumes nothing.

        Raises :py:exc:`~bitio.exceptions.OutOfRangeError` if 'bits' is not in
        the range 0 to :py:data:`~bitio.bits.MAX_BITS` and
        :py:exc:`~bitio.exceptions.EndOfStreamError` if the file runs out.
        """
        check_bit_count(bits)
        self._check_attached()

        value = 0
        remaining = bits

        while remaining > self._bits_pending:
            value = (value << self._bits_pending) | self._current_byte
            remaining -= self._bits_pending
            self._advance(self._bits_pending)

            self._current_byte = 0
            self._bits_pending = 0
            self._read_byte()

        if remaining:
            self._bits_pending -= remaining
            value = (value << remaining) | (self._current_byte >> self._bits_pending)
            self._current_byte &= mask(self._bits_pending)
            self._advance(remaining)

        return value

    def read_bitarray(self, bits):
        """
        Read 'bits' bits returning the value as a big-endian
        :py:class:`bitarray.bitarray`. Unlike :py:meth:`read_bits`, there is no
        limit on the length.
        """
        out = bitarray(endian="big")

        remaining = bits
        while remaining > 0:
            chunk = min(remaining, MAX_BITS)
            out.extend(int2ba(self.read_bits(chunk), length=chunk, endian="big"))
            remaining -= chunk

        return out

    def read_bytes(self, num_bytes):
        """
        Read a number of 8-bit values from the current bit position (which
        need not be byte aligned), returning a :py:class:`bytes` string.
        """
        return bytes(self.read_bits(8) for _ in range(num_bytes))

    def tell(self):
        """
        Report the current bit position within the file: the offset (in bits)
        from the start of the file of the next bit to be read.

        Raises :py:exc:`io.UnsupportedOperation` if the file is not seekable.
        """
        self._check_attached()
        self._require_seekable()

        return self._bit_position

    def seek_bits(self, position, whence=SEEK_SET):
        """
        Seek to a specific bit position in the file. Any buffered bits are
        discarded. Returns the new absolute bit position.

        Parameters
        ==========
        position : int
            The bit offset, interpreted according to 'whence'.
        whence : int
            :py:data:`os.SEEK_SET` (default) for an offset from the start of
            the file, :py:data:`os.SEEK_CUR` for an offset from the current
            bit position or :py:data:`os.SEEK_END` for an offset from the end
            of the file (usually negative).

        Raises :py:exc:`io.UnsupportedOperation` if the file is not seekable.
        Errors from the file's own ``seek()`` (e.g. for a negative byte
        offset) are passed on unchanged and leave the reader's position and
        buffered bits as they were (or, for SEEK_END, at the end of the file).
        Seeking part-way into a byte beyond the end of the file raises
        :py:exc:`~bitio.exceptions.EndOfStreamError`.
        """
        self._check_attached()
        self._require_seekable()

        if whence == SEEK_SET:
            target = position
        elif whence == SEEK_CUR:
            target = self._bit_position + position
        elif whence == SEEK_END:
            end = self._file.seek(0, SEEK_END)

            # The file has now moved so any buffered bits are stale
            self._current_byte = 0
            self._bits_pending = 0
            self._bit_position = to_bit_offset(end)

            target = self._bit_position + position
        else:
            raise ValueError("Invalid whence ({!r})".format(whence))

        byte_offset, bit_offset = from_bit_offset(target)

        self._file.seek(byte_offset)
        self._current_byte = 0
        self._bits_pending = 0
        self._bit_position = to_bit_offset(byte_offset)

        # Skip over the leading bits of a partially consumed byte
        if bit_offset:
            self._read_byte()
            self._bits_pending -= bit_offset
            self._current_byte &= mask(self._bits_pending)

        self._bit_position = target

        logging.debug(
            "seek_bits: moved to bit %d (byte %d, bit %d)",
            target,
            byte_offset,
            bit_offset,
        )

        return target

    def reset(self):
        """
        Discard any buffered bits so that the next read starts from the first
        bit of the next byte in the file. Use this after moving the underlying
        file's position directly. Returns the number of bits discarded.
        """
        self._check_attached()

        discarded = self._bits_pending
        self._current_byte = 0
        self._bits_pending = 0

        if self._seekable:
            self._bit_position = self._file.tell() * 8

        if discarded:
            logging.debug("reset: discarded %d buffered bit(s)", discarded)

        return discarded

    def into_inner(self):
        """
        Detach and return the underlying file. The :py:class:`BitReader` may
        not be used afterwards. Any buffered bits which have not been read are
        discarded.
        """
        self._check_attached()

        if self._bits_pending:
            logging.debug(
                "into_inner: discarding %d unread bit(s)", self._bits_pending
            )

        file = self._file
        self._file = None
        self._current_byte = 0
        self._bits_pending = 0
        self._bit_position = None

        return file
