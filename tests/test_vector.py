# -*- coding: utf-8 -*-
"""
Tests for the Vec2 vector utility.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import warnings

import numpy as np
import pytest

from destretch.exceptions import DivideByZeroError, ValidationError
from destretch.vector import (
    ELEMENT_TYPES,
    Vec2,
    grid_vector,
    offset_vector,
    resolve_element_type,
)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestVec2Construction:

    def test_default_dtype_is_float64(self):
        v = Vec2(1.5, 2.5)
        assert v.dtype == np.float64
        assert v.x == 1.5
        assert v.y == 2.5

    @pytest.mark.parametrize('dtype', [dt.name for dt in ELEMENT_TYPES])
    def test_all_element_types_accepted(self, dtype):
        v = Vec2(1, 2, dtype=dtype)
        assert v.dtype == np.dtype(dtype)
        assert isinstance(v.x, np.dtype(dtype).type)

    @pytest.mark.parametrize('dtype', ['complex128', 'bool', 'float16', 'object'])
    def test_unsupported_dtype_raises(self, dtype):
        with pytest.raises(ValidationError, match="element type"):
            Vec2(1, 2, dtype=dtype)

    def test_resolve_element_type_returns_dtype(self):
        assert resolve_element_type(np.int32) == np.dtype('int32')

    @pytest.mark.parametrize('dtype,native', [
        ('>f4', 'float32'), ('>i2', 'int16'), ('>u8', 'uint64'),
    ])
    def test_big_endian_resolves_to_native(self, dtype, native):
        assert resolve_element_type(dtype) == np.dtype(native)
        assert Vec2(1, 2, dtype=dtype) == Vec2(1, 2, dtype=native)

    def test_integral_float_accepted_for_int(self):
        v = Vec2(3.0, -4.0, dtype='int64')
        assert v == Vec2(3, -4, dtype='int64')

    def test_non_integral_float_rejected_for_int(self):
        with pytest.raises(ValidationError, match="Cannot represent"):
            Vec2(3.5, 1, dtype='int32')

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="out of range"):
            Vec2(300, 1, dtype='uint8')

    def test_bool_component_rejected(self):
        with pytest.raises(ValidationError, match="bool"):
            Vec2(True, 1, dtype='int32')

    def test_from_tuple(self):
        assert Vec2.from_tuple((2, 3), dtype='int16') == Vec2(2, 3, dtype='int16')

    def test_unpacking(self):
        x, y = Vec2(7, 9, dtype='int64')
        assert (x, y) == (7, 9)

    def test_repr(self):
        assert repr(Vec2(4, 15, dtype='int32')) == "Vec2(4, 15, dtype='int32')"

    def test_helpers(self):
        assert offset_vector(1, 2).dtype == np.float64
        assert grid_vector(1, 2).dtype == np.int64

    def test_hashable(self):
        assert len({Vec2(1, 2, dtype='int32'), Vec2(1, 2, dtype='int32')}) == 1


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class TestVec2Arithmetic:

    def test_add_int(self):
        result = Vec2(3, 8, dtype='int32') + Vec2(1, 7, dtype='int32')
        assert result == Vec2(4, 15, dtype='int32')

    def test_add_float(self):
        result = Vec2(3.1, 8.1) + Vec2(1.1, 7.1)
        assert result.x == pytest.approx(4.2)
        assert result.y == pytest.approx(15.2)

    def test_sub_float(self):
        result = Vec2(3.1, 8.1) - Vec2(1.1, 7.1)
        assert result.x == pytest.approx(2.0)
        assert result.y == pytest.approx(1.0)

    def test_mul_scalar(self):
        assert Vec2(1.0, 2.5) * 10.0 == Vec2(10.0, 25.0)

    def test_mul_vector(self):
        assert Vec2(2.0, 2.5) * Vec2(2.0, 3.0) == Vec2(4.0, 7.5)

    def test_div_scalar(self):
        assert Vec2(1.0, 25.0) / 10.0 == Vec2(0.1, 2.5)

    def test_div_vector(self):
        assert Vec2(2.0, 7.5) / Vec2(4.0, 3.0) == Vec2(0.5, 2.5)

    def test_reflected_scalar_ops(self):
        assert 10 - Vec2(3, 4, dtype='int64') == Vec2(7, 6, dtype='int64')
        assert 2 * Vec2(3, 4, dtype='int64') == Vec2(6, 8, dtype='int64')
        assert 1 + Vec2(3, 4, dtype='int64') == Vec2(4, 5, dtype='int64')

    def test_int_dtype_preserved(self):
        result = Vec2(1, 2, dtype='int16') * 3
        assert result.dtype == np.int16
        assert isinstance(result.x, np.int16)

    def test_int_division_floors(self):
        assert Vec2(7, -7, dtype='int64') / 2 == Vec2(3, -4, dtype='int64')

    def test_int_overflow_raises(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            with pytest.raises(ValidationError, match="out of range"):
                Vec2(127, 0, dtype='int8') + 1
            with pytest.raises(ValidationError, match="out of range"):
                Vec2(0, 5, dtype='uint8') - Vec2(1, 1, dtype='uint8')
            with pytest.raises(ValidationError, match="out of range"):
                Vec2(2 ** 62, 1, dtype='int64') * 2

    def test_int_result_at_limit_accepted(self):
        assert Vec2(126, -127, dtype='int8') + 1 == \
            Vec2(127, -126, dtype='int8')
        assert 255 - Vec2(0, 255, dtype='uint8') == \
            Vec2(255, 0, dtype='uint8')

    def test_float_overflow_gives_inf(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            result = Vec2(3e38, 1.0, dtype='float32') * 10.0
        assert result.x == np.inf

    def test_mixed_dtype_rejected(self):
        with pytest.raises(ValidationError, match="mismatch"):
            Vec2(1, 2, dtype='int32') + Vec2(1, 2, dtype='int64')

    def test_non_integral_scalar_rejected_for_int(self):
        with pytest.raises(ValidationError):
            Vec2(1, 2, dtype='int32') * 0.5

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            Vec2(1.0, 2.0) + "a"

    def test_equality_requires_same_dtype(self):
        assert Vec2(1, 2, dtype='int32') != Vec2(1, 2, dtype='int64')

    def test_astype_truncates(self):
        assert Vec2(1.9, -1.9).astype('int32') == Vec2(1, -1, dtype='int32')


# ---------------------------------------------------------------------------
# Division by zero
# ---------------------------------------------------------------------------

class TestVec2DivideByZero:

    @pytest.mark.parametrize('dtype', ['int8', 'int32', 'int64', 'uint16'])
    def test_int_zero_scalar_raises(self, dtype):
        with pytest.raises(DivideByZeroError):
            Vec2(4, 2, dtype=dtype) / 0

    def test_int_zero_component_raises(self):
        with pytest.raises(DivideByZeroError):
            Vec2(4, 2, dtype='int32') / Vec2(2, 0, dtype='int32')

    def test_int_reflected_zero_raises(self):
        with pytest.raises(DivideByZeroError):
            10 / Vec2(0, 1, dtype='int32')

    def test_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            Vec2(1, 1, dtype='int64') // Vec2(0, 0, dtype='int64')

    def test_float_zero_gives_inf(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            result = Vec2(1.0, -1.0) / 0.0
        assert result.x == np.inf
        assert result.y == -np.inf

    def test_float_zero_over_zero_gives_nan(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            result = Vec2(0.0, 1.0, dtype='float32') / Vec2(0.0, 2.0, dtype='float32')
        assert np.isnan(result.x)
        assert result.y == np.float32(0.5)
