import numpy as np
import pytest

from eeg_biomarkers.processing.fft import fft, ifft


@pytest.mark.parametrize("n", [2, 8, 64, 512])
def test_fft_matches_dft_for_power_of_two(n):
    x = np.random.default_rng(0).normal(size=n)
    np.testing.assert_allclose(fft(x), np.fft.fft(x), atol=1e-9)


@pytest.mark.parametrize("n", [1, 2, 16, 256, 1024])
def test_round_trip_recovers_signal(n):
    x = np.random.default_rng(n).normal(size=n)
    recovered = ifft(fft(x))
    np.testing.assert_allclose(recovered.real, x, atol=1e-9)
    np.testing.assert_allclose(recovered.imag, 0.0, atol=1e-9)


@pytest.mark.parametrize("n", [7, 12, 64, 100])
def test_fft_is_linear(n):
    rng = np.random.default_rng(42)
    x, y = rng.normal(size=n), rng.normal(size=n)
    a, b = 2.5, -0.75
    np.testing.assert_allclose(fft(a * x + b * y), a * fft(x) + b * fft(y), atol=1e-9)


def test_odd_length_is_padded_with_one_zero_then_truncated():
    x = np.array([1.0, -2.0, 3.0])
    expected = np.fft.fft([1.0, -2.0, 3.0, 0.0])[:3]
    np.testing.assert_allclose(fft(x), expected, atol=1e-12)


def test_output_length_matches_input():
    for n in (3, 5, 6, 9, 31):
        assert fft(np.ones(n)).shape == (n,)


def test_empty_and_single_sample():
    assert fft([]).shape == (0,)
    assert ifft([]).shape == (0,)
    np.testing.assert_allclose(fft([4.0]), [4.0 + 0j])


def test_does_not_modify_input():
    x = np.arange(8, dtype=float)
    fft(x)
    np.testing.assert_array_equal(x, np.arange(8, dtype=float))
