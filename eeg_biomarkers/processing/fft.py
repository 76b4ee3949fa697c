"""
Radix-2 Cooley-Tukey FFT

The transform recurses over a single input buffer using (start, stride)
index arithmetic for the even/odd split, so no sub-arrays are sliced out
at each level.

Odd-length policy: a sub-problem of odd length n > 1 is right-padded with
one zero, transformed at n + 1 points, and truncated back to n bins. For
power-of-two lengths this is the exact DFT; for other lengths it is a
deterministic approximation and the inverse is not exact.
"""

from functools import lru_cache

import numpy as np


@lru_cache(maxsize=64)
def _twiddles(n: int) -> np.ndarray:
    factors = np.exp(-2j * np.pi * np.arange(n // 2) / n)
    factors.setflags(write=False)
    return factors


def _transform(buf: np.ndarray, start: int, stride: int, n: int) -> np.ndarray:
    if n == 1:
        return buf[start:start + 1].copy()

    if n % 2:
        padded = np.zeros(n + 1, dtype=np.complex128)
        padded[:n] = buf[start:start + stride * (n - 1) + 1:stride]
        return _transform(padded, 0, 1, n + 1)[:n]

    half = n // 2
    even = _transform(buf, start, 2 * stride, half)
    odd = _transform(buf, start + stride, 2 * stride, half)
    odd *= _twiddles(n)

    out = np.empty(n, dtype=np.complex128)
    out[:half] = even + odd
    out[half:] = even - odd
    return out


def fft(signal) -> np.ndarray:
    """
    Forward FFT

    Args:
        signal: Real or complex samples (n,)

    Returns:
        np.ndarray: n complex frequency bins
    """
    buf = np.asarray(signal, dtype=np.complex128).ravel()
    if buf.shape[0] == 0:
        return buf.copy()
    return _transform(buf, 0, 1, buf.shape[0])


def ifft(spectrum) -> np.ndarray:
    """Inverse FFT via the conjugation identity ``conj(fft(conj(X))) / n``"""
    buf = np.asarray(spectrum, dtype=np.complex128).ravel()
    n = buf.shape[0]
    if n == 0:
        return buf.copy()
    return np.conj(fft(np.conj(buf))) / n
