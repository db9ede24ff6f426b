# tests/test_core_fft.py
import numpy as np
import pytest

from mixfft.core import (
    ComplexArray,
    InvalidLengthError,
    TypeMismatchError,
    dft,
    fft,
    ifft,
    frequency_map,
    mixed_radix_transform,
    radix2_transform,
    smallest_odd_factor,
)

EPSILON = 1e-4


def assert_complex_close(expected, actual, atol=EPSILON):
    assert expected.length == actual.length
    np.testing.assert_allclose(actual.real, expected.real, rtol=0, atol=atol)
    np.testing.assert_allclose(actual.imag, expected.imag, rtol=0, atol=atol)


def assert_fft_matches(original, expected):
    copy = ComplexArray(original)
    transformed = fft(original)
    assert_complex_close(expected, transformed)
    assert_complex_close(copy, ifft(transformed))


# ---------------------------------------------------------------------------
# Known pairs
# ---------------------------------------------------------------------------

def test_n4_constant_gives_single_frequency():
    assert_fft_matches([1, 1, 1, 1], ComplexArray([2, 0, 0, 0]))


def test_n4_delta_gives_flat_spectrum():
    assert_fft_matches([1, 0, 0, 0], ComplexArray([0.5, 0.5, 0.5, 0.5]))


def test_n4_single_high_frequency():
    assert_fft_matches([1, -1, 1, -1], ComplexArray([0, 0, 2, 0]))


def test_n4_single_low_frequency():
    assert_fft_matches([1, 0, -1, -0], ComplexArray([0, 1, 0, 1]))


def test_n4_high_frequency_and_dc():
    assert_fft_matches([1, 0, 1, 0], ComplexArray([1, 0, 1, 0]))


def test_n4_inverse_of_high_bin():
    assert_complex_close(ComplexArray([1, -1, 1, -1]), ifft([0, 0, 2, 0]))


def test_n6_constant():
    assert_fft_matches([1] * 6, ComplexArray([np.sqrt(6), 0, 0, 0, 0, 0]))


def test_n6_delta():
    a = 1 / np.sqrt(6)
    assert_fft_matches([1, 0, 0, 0, 0, 0], ComplexArray([a] * 6))


def test_trivial_lengths_pass_through():
    empty = ComplexArray(0)
    assert fft(empty) is empty
    assert ifft(empty) is empty
    assert fft([]).length == 0

    one = ComplexArray.from_complex([3 - 1j])
    assert fft(one) is one
    np.testing.assert_array_equal(one.to_complex(), [3 - 1j])


# ---------------------------------------------------------------------------
# Against the direct DFT and numpy
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("n", [2, 3, 5, 6, 10, 13, 14, 45, 512, 900])
def test_matches_dft(n, random_array):
    a = random_array(n)
    expected = dft(a)
    assert_complex_close(expected, fft(ComplexArray(a)))
    assert_complex_close(dft(a, inverse=True), ifft(ComplexArray(a)))


@pytest.mark.parametrize("n", [7, 16, 24, 27, 100, 243, 1000])
def test_matches_numpy_orthonormal(n, rng):
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    X = fft(ComplexArray.from_complex(z))
    np.testing.assert_allclose(X.to_complex(), np.fft.ifft(z, norm="ortho"), atol=1e-9)
    x = ifft(ComplexArray.from_complex(z))
    np.testing.assert_allclose(x.to_complex(), np.fft.fft(z, norm="ortho"), atol=1e-9)


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 5, 8, 9, 12, 13, 30, 64, 100, 128, 243])
def test_round_trip(n, random_array):
    x = random_array(n)
    back = ifft(fft(ComplexArray(x)))
    assert_complex_close(x, back)


def test_unitary_energy(random_array):
    for n in (16, 18):
        x = random_array(n)
        X = fft(ComplexArray(x))
        np.testing.assert_allclose(np.sum(X.magnitude() ** 2), np.sum(x.magnitude() ** 2))


def test_float32_storage(random_array):
    x = random_array(12, dtype=np.float32)
    X = fft(ComplexArray(x))
    assert X.dtype == np.float32
    np.testing.assert_allclose(X.to_complex(), np.fft.ifft(x.to_complex(), norm="ortho"), atol=1e-5)

    X2 = fft(ComplexArray(random_array(16, dtype=np.float32)))
    assert X2.dtype == np.float32


def test_nan_propagates():
    out = fft([np.nan, 0, 0, 0])
    assert np.all(np.isnan(out.real))


# ---------------------------------------------------------------------------
# Engines and storage semantics
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "n, p",
    [(1, 1), (3, 3), (9, 3), (10, 10), (13, 13), (14, 14), (20, 20), (25, 5), (45, 3), (49, 7), (100, 5), (900, 3)],
)
def test_smallest_odd_factor(n, p):
    assert smallest_odd_factor(n) == p


def test_radix2_returns_new_array(random_array):
    x = random_array(8)
    before = x.to_complex()
    X = fft(x)
    assert X is not x
    np.testing.assert_array_equal(x.to_complex(), before)


def test_radix2_rejects_other_lengths():
    with pytest.raises(InvalidLengthError):
        radix2_transform(ComplexArray(6))


def test_mixed_radix_works_in_place(random_array):
    x = random_array(12)
    expected = dft(x)
    X = fft(x)
    assert X is x
    assert_complex_close(expected, x)


def test_mixed_radix_on_power_of_two_length_still_correct(random_array):
    # a power of two has no odd factor, so this reduces to one direct level
    x = random_array(8)
    expected = dft(x)
    assert_complex_close(expected, mixed_radix_transform(ComplexArray(x)))


def test_strict_inputs():
    with pytest.raises(TypeMismatchError):
        fft([1, 2, 3], strict=True)
    with pytest.raises(TypeError):
        ifft((1, 2), strict=True)
    assert fft(ComplexArray([1, 1]), strict=True).length == 2


def test_non_numeric_input():
    with pytest.raises(TypeMismatchError):
        fft("1234")


def test_array_methods_delegate(random_array):
    x = random_array(6)
    expected = dft(x)
    assert_complex_close(expected, ComplexArray(x).fft())
    assert_complex_close(x, ComplexArray(x).fft().ifft())


# ---------------------------------------------------------------------------
# Frequency maps
# ---------------------------------------------------------------------------

def test_frequency_map_identity_keeps_values():
    original = ComplexArray([1, 2, 3, 4])
    filtered = original.frequency_map(lambda value, i, n: None)
    assert_complex_close(original, filtered)
    # power-of-two path does not touch the caller's array
    np.testing.assert_array_equal(original.real, [1, 2, 3, 4])


def test_frequency_map_halves():
    def halve(value, i, n):
        value.real /= 2
        value.imag /= 2

    filtered = frequency_map(ComplexArray([1, 2, 3, 4]), halve)
    assert_complex_close(ComplexArray([0.5, 1, 1.5, 2]), filtered)


def test_frequency_map_zeroes():
    def zero(value, i, n):
        value.real = value.imag = 0

    filtered = frequency_map([1, 2, 3, 4], zero)
    assert_complex_close(ComplexArray([0, 0, 0, 0]), filtered)


def test_frequency_map_shift():
    def shift(value, i, n):
        # multiply by exp(2j*pi*i/n) with n = 4
        phase_r = 0 if i % 2 else (1 - i)
        phase_i = (2 - i) if i % 2 else 0
        value.real, value.imag = (
            phase_r * value.real - phase_i * value.imag,
            phase_r * value.imag + phase_i * value.real,
        )

    filtered = frequency_map(ComplexArray([1, 2, 3, 4]), shift)
    assert_complex_close(ComplexArray([4, 1, 2, 3]), filtered)


def test_frequency_map_non_power_of_two(random_array):
    x = random_array(15)
    keep = ComplexArray(x)
    filtered = frequency_map(x, lambda value, i, n: None)
    assert_complex_close(keep, filtered)
