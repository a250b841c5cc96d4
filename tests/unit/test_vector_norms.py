"""
Tests for length, normalization and inner product

Checks:
1. length2 equals the sum of squares for D = 0..6
2. normalize returns the previous length and yields unit vectors
3. The zero vector normalizes to the first axis and returns 0
4. dot is the standard inner product
"""

import logging
import math

import numpy as np
import pytest

from exprvec import Vec1, Vec2, Vec3, Vec3Ref, Vec4, Mode, vector_type


def _sequential(dim: int):
    """Owning vector (1, 2, ..., dim) of any dimension."""
    ref = vector_type(dim, mode=Mode.REFERENCE)(np.arange(1.0, dim + 1.0))
    return vector_type(dim)(ref)


# =============================================================================
# LENGTH
# =============================================================================


class TestLength:
    """Tests for length2 and length"""

    @pytest.mark.parametrize("dim", [1, 2, 3, 4, 5, 6])
    def test_length2_is_sum_of_squares(self, dim: int) -> None:
        """length2 matches the sum of squared components whatever the pairing"""
        vec = _sequential(dim)
        expected = sum(float(k) * float(k) for k in range(1, dim + 1))

        assert vec.length2() == pytest.approx(expected)

    def test_length2_random_components(self) -> None:
        """Same check on non-integer data for the specialized dimensions"""
        rng = np.random.default_rng(7)
        for dim in (1, 2, 3, 4, 7):
            data = rng.normal(size=dim)
            vec = vector_type(dim, mode=Mode.REFERENCE)(data)
            assert vec.length2() == pytest.approx(float(np.sum(data * data)), rel=1e-12)

    def test_zero_dimension(self) -> None:
        """The empty vector has zero length"""
        assert vector_type(0)().length2() == 0.0

    def test_length(self) -> None:
        """length is the square root of length2"""
        assert Vec2(3.0, 4.0).length() == 5.0
        assert Vec1(-2.0).length() == 2.0
        assert Vec4(1.0).length() == 2.0


# =============================================================================
# NORMALIZATION
# =============================================================================


class TestNormalize:
    """Tests for normalize and normalized"""

    def test_returns_previous_length(self) -> None:
        """normalize returns the norm before normalization"""
        vec = Vec3(3.0, 0.0, 4.0)
        assert vec.normalize() == 5.0
        assert vec.length() == pytest.approx(1.0)
        assert list(vec) == pytest.approx([0.6, 0.0, 0.8])

    @pytest.mark.parametrize("dim", [1, 2, 3, 4, 9])
    def test_unit_length_after_normalize(self, dim: int) -> None:
        """Any nonzero vector ends up with unit length"""
        rng = np.random.default_rng(dim)
        data = rng.uniform(-10.0, 10.0, size=dim)
        vec = vector_type(dim, mode=Mode.REFERENCE)(data)
        expected = math.sqrt(float(np.sum(data * data)))

        assert vec.normalize() == pytest.approx(expected)
        assert vec.length() == pytest.approx(1.0)

    @pytest.mark.parametrize("vec_type,expected", [
        (Vec1, [1.0]),
        (Vec2, [1.0, 0.0]),
        (Vec3, [1.0, 0.0, 0.0]),
        (Vec4, [1.0, 0.0, 0.0, 0.0]),
        (vector_type(6), [1.0, 0.0, 0.0, 0.0, 0.0, 0.0]),
    ])
    def test_zero_vector_falls_back_to_first_axis(self, vec_type, expected) -> None:
        """The zero vector becomes (1, 0, ...) and 0 is returned"""
        vec = vec_type(0.0)
        assert vec.normalize() == 0.0
        assert list(vec) == expected

    def test_zero_reference_vector_writes_buffer(self) -> None:
        """Fallback is written into referenced storage too"""
        buffer = np.zeros(3)
        assert Vec3Ref(buffer).normalize() == 0.0
        assert buffer.tolist() == [1.0, 0.0, 0.0]

    def test_zero_vector_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """The fallback is reported at DEBUG level"""
        caplog.set_level(logging.DEBUG, logger="exprvec.model.vector")
        Vec3(0.0).normalize()

        assert "Normalizing zero Vec3" in caplog.text

    def test_normalized_leaves_original(self) -> None:
        """normalized returns a copy"""
        vec = Vec2(0.0, -2.0)
        unit = vec.normalized()

        assert unit == Vec2(0.0, -1.0)
        assert vec == Vec2(0.0, -2.0)

    def test_normalized_zero_vector(self) -> None:
        """normalized applies the same fallback"""
        assert Vec3(0.0).normalized() == Vec3(1.0, 0.0, 0.0)


# =============================================================================
# INNER PRODUCT
# =============================================================================


class TestDot:
    """Tests for dot"""

    def test_inner_product(self) -> None:
        """(1,2,3) . (4,5,6) == 32"""
        assert Vec3(1.0, 2.0, 3.0).dot(Vec3(4.0, 5.0, 6.0)) == 32.0

    def test_symmetric_and_mixed_modes(self) -> None:
        """dot is symmetric and accepts references"""
        a = Vec4(1.0, -2.0, 0.5, 3.0)
        b = vector_type(4, mode=Mode.REFERENCE)(np.array([2.0, 1.0, 4.0, -1.0]))

        assert a.dot(b) == b.dot(a) == -1.0

    def test_dot_with_self_is_length2(self) -> None:
        """v . v equals the squared length"""
        vec = _sequential(6)
        assert vec.dot(vec) == pytest.approx(vec.length2())

    def test_dimension_mismatch(self) -> None:
        """dot needs matching dimensions"""
        with pytest.raises(TypeError):
            Vec3(1.0).dot(Vec2(1.0))
        with pytest.raises(TypeError):
            Vec3(1.0).dot((1.0, 1.0, 1.0))
