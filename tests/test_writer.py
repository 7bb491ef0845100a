import logging

import pytest

from io import BytesIO

from mock import Mock

from bitarray import bitarray

from bitio import BitWriter, OutOfRangeError


class ShortWriter:
    """A file which accepts at most one byte per write() call."""

    def __init__(self):
        self.data = bytearray()
        self.calls = 0

    def write(self, data):
        self.calls += 1
        self.data += data[:1]
        return 1


@pytest.fixture
def f():
    return BytesIO()


@pytest.fixture
def w(f):
    return BitWriter(f)


class TestWriteBit:
    def test_writing_whole_number_of_bytes(self, f, w):
        for bit in [1, 0, 1, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1, 1, 1, 1]:  # 0xA5, 0x0F
            assert w.write_bit(bit) == 1

        assert f.getvalue() == b"\xA5\x0F"
        assert w.bits_pending == 0

    def test_partial_byte_not_written_until_flush(self, f, w):
        w.write_bit(1)
        w.write_bit(1)
        assert f.getvalue() == b""
        assert w.bits_pending == 2

        assert w.flush() == 6
        assert f.getvalue() == b"\xC0"

    def test_accepts_bools(self, f, w):
        w.write_bit(True)
        w.write_bit(False)
        w.flush()
        assert f.getvalue() == b"\x80"

    @pytest.mark.parametrize("value", [2, -1, None, "1"])
    def test_rejects_non_bits(self, f, w, value):
        with pytest.raises(OutOfRangeError):
            w.write_bit(value)
        assert w.bits_pending == 0


class TestWriteBits:
    def test_msb_first_packing(self, f, w):
        assert w.write_bit(0) == 1
        assert w.write_bits(7, 0b1000001) == 7
        assert w.write_bits(2, 0b01) == 2
        assert w.flush() == 6
        assert f.getvalue() == bytes([0b01000001, 0b01000000])

    def test_write_nothing(self, f, w):
        w.write_bit(1)
        assert w.write_bits(0, 0x123) == 0
        assert w.bits_pending == 1
        assert f.getvalue() == b""

    def test_write_only_lowest_order_bits(self, f, w):
        assert w.write_bits(12, 0xABCD) == 12
        assert w.bits_pending == 4
        w.flush()
        assert f.getvalue() == b"\xBC\xD0"

    def test_write_zeros_above_msb(self, f, w):
        w.write_bits(16, 0xABC)
        assert f.getvalue() == b"\x0A\xBC"

    def test_negative_values_use_low_bits(self, f, w):
        w.write_bits(8, -1)
        w.write_bits(4, -2)
        w.flush()
        assert f.getvalue() == b"\xFF\xE0"

    def test_straddling_bytes(self, f, w):
        w.write_bits(3, 0b101)
        w.write_bits(10, 0b1100110011)
        assert f.getvalue() == b"\xB9"
        assert w.bits_pending == 5
        assert w.flush() == 3
        assert f.getvalue() == b"\xB9\x98"

    def test_64_bits(self, f, w):
        w.write_bit(1)
        assert w.write_bits(64, 0x0123456789ABCDEF) == 64
        assert w.flush() == 7
        assert f.getvalue() == bytes(
            [0x80, 0x91, 0xA2, 0xB3, 0xC4, 0xD5, 0xE6, 0xF7, 0x80]
        )

    @pytest.mark.parametrize("bits", [65, 100, -1])
    def test_rejects_bad_counts(self, f, w, bits):
        with pytest.raises(OutOfRangeError):
            w.write_bits(bits, 0)
        assert w.bits_pending == 0
        assert f.getvalue() == b""

    def test_batches_whole_bytes_into_one_write(self):
        f = Mock(wraps=BytesIO())
        w = BitWriter(f)
        w.write_bits(4, 0xF)
        w.write_bits(32, 0x12345678)
        assert f.write.call_count == 1
        assert f.write.call_args[0][0] == b"\xF1\x23\x45\x67"


class TestWriteBitarray:
    def test_unaligned(self, f, w):
        w.write_bit(1)
        assert w.write_bitarray(bitarray("0101")) == 4
        w.flush()
        assert f.getvalue() == b"\xA8"

    def test_longer_than_64_bits(self, f, w):
        value = bitarray("10" * 40)
        assert w.write_bitarray(value) == 80
        assert f.getvalue() == b"\xAA" * 10

    def test_little_endian_written_in_index_order(self, f, w):
        w.write_bit(1)
        assert w.write_bitarray(bitarray("0101", endian="little")) == 4
        w.flush()
        assert f.getvalue() == b"\xA8"

    def test_little_endian_longer_than_64_bits(self, f, w):
        value = bitarray("1" + "0" * 71, endian="little")
        assert w.write_bitarray(value) == 72
        assert f.getvalue() == b"\x80" + b"\x00" * 8

    def test_empty(self, f, w):
        assert w.write_bitarray(bitarray()) == 0
        assert w.flush() == 0
        assert f.getvalue() == b""


class TestWriteBytes:
    def test_aligned(self, f, w):
        assert w.write_bytes(b"AB") == 16
        assert f.getvalue() == b"AB"

    def test_unaligned(self, f, w):
        w.write_bits(4, 0xF)
        assert w.write_bytes(bytearray(b"\x12\x34")) == 16
        assert w.flush() == 4
        assert f.getvalue() == b"\xF1\x23\x40"


class TestFlush:
    @pytest.mark.parametrize("num_bits", range(17))
    def test_padding_completes_byte(self, f, w, num_bits):
        for _ in range(num_bits):
            w.write_bit(1)
        padding = w.flush()
        assert 0 <= padding <= 7
        assert (num_bits + padding) % 8 == 0
        assert len(f.getvalue()) * 8 == num_bits + padding

    def test_flush_is_idempotent(self, f, w):
        w.write_bits(3, 0b111)
        assert w.flush() == 5
        assert w.flush() == 0
        assert f.getvalue() == b"\xE0"

    def test_flush_when_aligned_writes_nothing(self, f, w):
        assert w.flush() == 0
        assert f.getvalue() == b""

    def test_flush_flushes_file(self):
        f = Mock(wraps=BytesIO())
        w = BitWriter(f)
        w.write_bit(1)
        assert w.flush() == 7
        assert f.flush.call_count == 1

    def test_flush_bits_does_not_flush_file(self):
        f = Mock(wraps=BytesIO())
        w = BitWriter(f)
        w.write_bit(1)
        assert w.flush_bits() == 7
        assert f.flush.call_count == 0
        assert f.write.call_args[0][0] == b"\x80"

    def test_file_without_flush(self):
        f = ShortWriter()
        w = BitWriter(f)
        w.write_bit(1)
        assert w.flush() == 7
        assert f.data == b"\x80"

    def test_logs_padding(self, w, caplog):
        caplog.set_level(logging.DEBUG)
        w.write_bit(1)
        w.flush()
        assert "added 7 padding bit(s)" in caplog.text


class TestUnderlyingFileErrors:
    def test_short_writes_are_retried(self):
        f = ShortWriter()
        w = BitWriter(f)
        w.write_bytes(b"abc")
        assert f.data == b"abc"
        assert f.calls == 3

    def test_write_making_no_progress(self):
        f = Mock(spec=["write"])
        f.write.return_value = 0
        w = BitWriter(f)
        with pytest.raises(OSError):
            w.write_bits(8, 0xFF)

    def test_errors_propagate_unchanged(self):
        error = OSError("disk full")
        f = Mock(spec=["write", "flush"])
        f.write.side_effect = error
        w = BitWriter(f)
        w.write_bits(7, 0)
        with pytest.raises(OSError) as exc_info:
            w.write_bit(1)
        assert exc_info.value is error

    def test_flush_errors_propagate(self):
        f = Mock(wraps=BytesIO())
        f.flush.side_effect = OSError("broken")
        w = BitWriter(f)
        with pytest.raises(OSError, match="broken"):
            w.flush()


class TestIntoInner:
    def test_returns_file(self, f, w):
        assert w.file is f
        assert w.into_inner() is f

    def test_does_not_flush(self, f, w, caplog):
        caplog.set_level(logging.DEBUG)
        w.write_bits(3, 0b111)
        assert w.into_inner() is f
        assert f.getvalue() == b""
        assert "discarding 3 unflushed bit(s)" in caplog.text

    def test_detached_writer_unusable(self, f, w):
        w.into_inner()
        assert w.file is None
        with pytest.raises(ValueError):
            w.write_bit(1)
        with pytest.raises(ValueError):
            w.write_bytes(b"x")
        with pytest.raises(ValueError):
            w.flush()
        with pytest.raises(ValueError):
            w.into_inner()
