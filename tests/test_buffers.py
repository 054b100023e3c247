"""Tests for BufferRange and the buffer read/write helpers."""

from __future__ import annotations

import array

import numpy as np
import pytest

from pdf_explore.buffers import (
    BufferRange,
    MutableNumericSequence,
    as_range,
    check_bounds,
    is_inverted,
    read_input,
    read_values,
    sequential_sum,
    write_masked,
    write_values,
)


class TestBufferRange:
    def test_defaults_cover_whole_buffer(self) -> None:
        rng = BufferRange([1.0, 2.0, 3.0])
        assert rng.stop == 3
        assert len(rng) == 3
        assert not rng.is_inverted

    def test_inverted(self) -> None:
        rng = BufferRange([1.0, 2.0, 3.0], 2, 1)
        assert rng.is_inverted
        assert len(rng) == 0

    def test_frozen(self) -> None:
        rng = BufferRange([1.0])
        with pytest.raises(AttributeError):
            rng.first = 1  # type: ignore[misc]

    def test_as_range_passthrough(self) -> None:
        rng = BufferRange([1.0], 0, 1)
        assert as_range(rng) is rng
        assert as_range([1.0, 2.0]).stop == 2

    def test_is_inverted_only_for_ranges(self) -> None:
        assert is_inverted(BufferRange([], 1, 0))
        assert not is_inverted([1.0, 2.0])

    @pytest.mark.parametrize("buffer", [[0.0], array.array("d", [0.0]), np.zeros(1)])
    def test_containers_satisfy_protocol(self, buffer: object) -> None:
        assert isinstance(buffer, MutableNumericSequence)

    def test_check_bounds(self) -> None:
        check_bounds(BufferRange([0.0, 0.0], 0, 2))
        with pytest.raises(IndexError):
            check_bounds(BufferRange([0.0, 0.0], 1, 3))
        with pytest.raises(IndexError):
            check_bounds(BufferRange([0.0, 0.0], -1, 1))


class TestReadWrite:
    def test_read_values_copies(self) -> None:
        buf = np.array([0.25, 0.5, 0.25])
        values = read_values(BufferRange(buf, 1), np.float32)
        values[0] = 9.0
        assert buf[1] == 0.5
        assert values.dtype == np.float32

    def test_write_values_list(self) -> None:
        buf = [0.0, 0.0, 0.0, 0.0]
        write_values(BufferRange(buf, 1, 3), np.array([0.5, 0.25], dtype=np.float32))
        assert buf == [0.0, 0.5, 0.25, 0.0]
        assert all(type(v) is float for v in buf)

    def test_write_values_ndarray(self) -> None:
        buf = np.zeros(3)
        write_values(BufferRange(buf), np.array([0.5, 0.25], dtype=np.float32), offset=1)
        np.testing.assert_array_equal(buf, [0.0, 0.5, 0.25])

    def test_write_masked(self) -> None:
        buf = [0.1, 0.2, 0.3]
        values = np.array([9.0, 8.0, 7.0])
        write_masked(BufferRange(buf), values, np.array([True, False, True]))
        assert buf == [9.0, 0.2, 7.0]

    def test_write_masked_ndarray_range(self) -> None:
        buf = np.array([0.1, 0.2, 0.3, 0.4])
        write_masked(BufferRange(buf, 1, 3), np.array([5.0, 6.0]), np.array([False, True]))
        np.testing.assert_array_equal(buf, [0.1, 0.2, 6.0, 0.4])

    def test_read_input_iterable(self) -> None:
        values = read_input((x for x in [1, 2, 3]), np.float32)
        np.testing.assert_array_equal(values, [1.0, 2.0, 3.0])

    def test_read_input_range(self) -> None:
        values = read_input(BufferRange([1, 2, 3, 4], 1, 3), np.int64)
        np.testing.assert_array_equal(values, [2, 3])


class TestSequentialSum:
    def test_empty(self) -> None:
        total = sequential_sum(np.array([], dtype=np.float32))
        assert total == 0.0
        assert total.dtype == np.float32

    def test_keeps_dtype_and_order(self) -> None:
        values = np.array([1e8, 1.0, -1e8, 1.0], dtype=np.float32)
        total = sequential_sum(values)
        assert total.dtype == np.float32
        assert total == np.float32(1.0)
