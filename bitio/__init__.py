r"""
The :py:mod:`bitio` module adds bit-level reading and writing to ordinary
binary file-like objects.

It is intended as a building block for encoders and decoders of formats which
pack values narrower than a byte (flags, fixed-width fields, variable length
codes) without having to track partial bytes by hand. Higher level encodings
(exp-golomb codes, Huffman codes etc.) are left to the caller.


Writing
-------

A :py:class:`BitWriter` wraps a writable binary file. Bits are packed
MSB-first and complete bytes are passed to the file as soon as they are
filled::

    >>> from io import BytesIO
    >>> from bitio import BitWriter, BitReader

    >>> f = BytesIO()
    >>> w = BitWriter(f)
    >>> w.write_bit(0)
    1
    >>> w.write_bits(7, 0b1000001)
    7
    >>> w.write_bits(2, 0b01)
    2

The final partial byte is only written when :py:meth:`BitWriter.flush` is
called. It is padded with zero bits and the number of padding bits is
returned::

    >>> w.flush()
    6
    >>> f.getvalue()
    b'A@'


Reading
-------

A :py:class:`BitReader` wraps a readable binary file and reads bits back in
the same order::

    >>> r = BitReader(BytesIO(f.getvalue()))
    >>> r.read_bit()
    0
    >>> bin(r.read_bits(7))
    '0b1000001'
    >>> bin(r.read_bits(2))
    '0b1'

If the wrapped file is seekable, the reader can jump to arbitrary bit
offsets::

    >>> r.seek_bits(1)
    1
    >>> r.read_bits(7)
    65

Reading beyond the end of the file raises
:py:exc:`~bitio.exceptions.EndOfStreamError`, an :py:exc:`EOFError`.


Ownership
---------

Both classes assume exclusive use of the file they wrap. The file may be
reclaimed using ``into_inner()``. Neither class flushes or rewinds anything
when doing so: call :py:meth:`BitWriter.flush` first to avoid losing
buffered bits.

"""

from bitio.version import __version__

from bitio.exceptions import *
from bitio.bits import *
from bitio.writer import *
from bitio.reader import *
