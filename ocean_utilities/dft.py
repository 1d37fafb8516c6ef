"""
Radix-2 discrete Fourier transforms over complex grids.

All transforms are unnormalized: a forward transform followed by an inverse
transform scales the signal by ``N`` (``N1 * N2`` in 2D). Callers divide
explicitly when they need the round trip to be the identity.

Two engines implement the same :class:`TransformEngine` interface:

- :class:`ScalarTransformEngine` is the reference implementation. It runs the
  butterflies one complex sample at a time.
- :class:`VectorizedTransformEngine` runs the same recurrence on
  :class:`~ocean_utilities.lanes.ComplexPair` lanes, two butterflies per step
  and every row of a 2D pass at once. It agrees with the scalar engine up to
  floating point reassociation of the twiddle recurrence.

Sizes must be powers of two greater than one. Calling a transform with any
other size is a programming error and fails an assertion; validate user input
with :func:`ocean_utilities.ocean_params.validate_params` before getting here.

Example:
    engine = get_transform_engine(vectorized=True)
    spectrum = engine.transform_2d(Direction.FORWARD, grid)
    grid_again = engine.transform_2d(Direction.INVERSE, spectrum) / grid.size
"""

import cmath
import math
import numbers
import os
from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from ocean_utilities.lanes import ComplexPair


class Direction(Enum):
    """Transform direction; the value is the sign of the twiddle exponent."""

    FORWARD = -1
    INVERSE = 1


def is_power_of_2(n):
    """Return True when ``n`` is an integral power of two.

    Non-integral values (``32.5``, ``32.0``) are never powers of two; they are
    not truncated first.

    Args:
        n: candidate size, a Python or numpy integer

    Returns:
        bool
    """
    if not isinstance(n, numbers.Integral):
        return False
    return n > 0 and (n & (n - 1)) == 0


def get_power_of_2(n):
    """Return ``log2(n)`` for a power of two (the index of the highest set bit)."""
    p = -1
    n = int(n)
    while n:
        n >>= 1
        p += 1
    return p


def bit_reverse(n, bits):
    """Reverse the low ``bits`` bits of a 32-bit value.

    Works on Python ints and element-wise on unsigned integer numpy arrays.
    """
    n = ((n & 0xFFFF0000) >> 16) | ((n & 0x0000FFFF) << 16)
    n = ((n & 0xFF00FF00) >> 8) | ((n & 0x00FF00FF) << 8)
    n = ((n & 0xF0F0F0F0) >> 4) | ((n & 0x0F0F0F0F) << 4)
    n = ((n & 0xCCCCCCCC) >> 2) | ((n & 0x33333333) << 2)
    n = ((n & 0xAAAAAAAA) >> 1) | ((n & 0x55555555) << 1)
    return n >> (32 - bits)


def transpose(grid):
    """Return a new contiguous ``N2 x N1`` copy of an ``N1 x N2`` grid."""
    return np.ascontiguousarray(np.asarray(grid).T)


def _check_size(n):
    assert n > 1, f"transform size must be greater than 1, got {n}"
    assert is_power_of_2(n), f"transform size must be a power of two, got {n}"


class TransformEngine(ABC):
    """Unnormalized 1D and 2D DFT/IDFT over complex128 grids.

    Subclasses only provide :meth:`_transform_rows`; the 2D transform is the
    separable row pass, transpose, row pass, transpose sequence and is shared.
    """

    name = "abstract"

    @abstractmethod
    def _transform_rows(self, direction, rows):
        """Transform each row of a ``(R, N)`` complex array, returning a new array."""

    def transform_1d(self, direction, samples, out=None):
        """Unnormalized 1D transform of ``samples``.

        Args:
            direction: :class:`Direction` or its value
            samples: 1D array, length a power of two greater than 1
            out: optional complex array filled with the result

        Returns:
            numpy.ndarray: complex128 transform (``out`` when given)
        """
        samples = np.asarray(samples, dtype=np.complex128)
        assert samples.ndim == 1, f"expected a 1D signal, got shape {samples.shape}"
        _check_size(samples.shape[0])

        result = self._transform_rows(Direction(direction), samples[np.newaxis, :])[0]
        if out is None:
            return result
        out[...] = result
        return out

    def transform_2d(self, direction, grid, out=None):
        """Unnormalized separable 2D transform of an ``N1 x N2`` grid.

        Rows are transformed, the grid transposed, rows transformed again and
        the result transposed back. The input grid is not modified.

        Args:
            direction: :class:`Direction` or its value
            grid: 2D array, both sizes powers of two greater than 1
            out: optional ``N1 x N2`` complex array filled with the result

        Returns:
            numpy.ndarray: complex128 transform (``out`` when given)
        """
        grid = np.asarray(grid, dtype=np.complex128)
        assert grid.ndim == 2, f"expected a 2D grid, got shape {grid.shape}"
        n1, n2 = grid.shape
        _check_size(n1)
        _check_size(n2)
        direction = Direction(direction)

        aux = self._transform_rows(direction, grid)
        # columns of the input become rows
        aux = self._transform_rows(direction, transpose(aux))
        result = transpose(aux)
        if out is None:
            return result
        out[...] = result
        return out

    def dft_1d(self, samples, out=None):
        return self.transform_1d(Direction.FORWARD, samples, out)

    def idft_1d(self, samples, out=None):
        return self.transform_1d(Direction.INVERSE, samples, out)

    def dft_2d(self, grid, out=None):
        return self.transform_2d(Direction.FORWARD, grid, out)

    def idft_2d(self, grid, out=None):
        return self.transform_2d(Direction.INVERSE, grid, out)

    def __repr__(self):
        return f"{type(self).__name__}()"


class ScalarTransformEngine(TransformEngine):
    """Reference engine: one butterfly at a time on Python complex values."""

    name = "scalar"

    def _transform_rows(self, direction, rows):
        out = np.empty(rows.shape, dtype=np.complex128)
        for r in range(rows.shape[0]):
            out[r] = self._butterflies(direction, rows[r].tolist())
        return out

    @staticmethod
    def _butterflies(direction, samples):
        n = len(samples)
        p = get_power_of_2(n)

        out = [0j] * n
        for i in range(n):
            out[bit_reverse(i, p)] = samples[i]

        # m = 2, twiddle is 1
        for k in range(0, n, 2):
            x0 = out[k]
            x1 = out[k + 1]
            out[k] = x0 + x1
            out[k + 1] = x0 - x1

        # m = 4, twiddles are 1 and -i (forward) or +i (inverse)
        if p >= 2:
            for k in range(0, n, 4):
                x0 = out[k]
                x2 = out[k + 2]
                out[k] = x0 + x2
                out[k + 2] = x0 - x2

                x1 = out[k + 1]
                x3 = out[k + 3]
                if direction is Direction.FORWARD:
                    x3_w = complex(x3.imag, -x3.real)
                else:
                    x3_w = complex(-x3.imag, x3.real)
                out[k + 1] = x1 + x3_w
                out[k + 3] = x1 - x3_w

        sign = direction.value
        for s in range(3, p + 1):
            m = 1 << s
            half = m >> 1
            wm = cmath.exp(complex(0, sign * 2 * math.pi / m))

            for k in range(0, n, m):
                w = complex(1, 0)
                for j in range(half):
                    x0 = out[k + j]
                    x1 = out[k + j + half] * w
                    out[k + j] = x0 + x1
                    out[k + j + half] = x0 - x1
                    w *= wm

        return out


class VectorizedTransformEngine(TransformEngine):
    """Pair-lane engine processing every row of a pass in lock-step."""

    name = "vectorized"

    def _transform_rows(self, direction, rows):
        num_rows, n = rows.shape
        p = get_power_of_2(n)

        out = np.empty((num_rows, n), dtype=np.complex128)
        out[:, bit_reverse(np.arange(n, dtype=np.uint32), p)] = rows

        blocks = out.reshape(num_rows, n // 2, 2)
        x0 = ComplexPair.load(blocks[..., 0])
        x1 = ComplexPair.load(blocks[..., 1])
        (x0 + x1).store(blocks[..., 0])
        (x0 - x1).store(blocks[..., 1])

        if p >= 2:
            if direction is Direction.FORWARD:
                quarter_turn = (1.0, -1.0)
            else:
                quarter_turn = (-1.0, 1.0)

            blocks = out.reshape(num_rows, n // 4, 4)
            x0 = ComplexPair.load(blocks[..., 0])
            x2 = ComplexPair.load(blocks[..., 2])
            (x0 + x2).store(blocks[..., 0])
            (x0 - x2).store(blocks[..., 2])

            x1 = ComplexPair.load(blocks[..., 1])
            x3 = ComplexPair.load(blocks[..., 3]).swap().mask(*quarter_turn)
            (x1 + x3).store(blocks[..., 1])
            (x1 - x3).store(blocks[..., 3])

        sign = direction.value
        for s in range(3, p + 1):
            m = 1 << s
            half = m >> 1
            wm = cmath.exp(complex(0, sign * 2 * math.pi / m))
            wm_2 = cmath.exp(complex(0, sign * 4 * math.pi / m))

            # lane 0 tracks even j, lane 1 odd j; both advance by wm^2
            step = ComplexPair.splat(wm_2)
            w = ComplexPair.from_lanes(1.0, wm)

            blocks = out.reshape(num_rows, n // m, m)
            for j in range(0, half, 2):
                lo = blocks[..., j:j + 2]
                hi = blocks[..., j + half:j + half + 2]

                x02 = ComplexPair.load(lo)
                x13 = ComplexPair.load(hi) * w
                (x02 + x13).store(lo)
                (x02 - x13).store(hi)

                w = w * step

        return out


def use_simd_default():
    """Capability flag from ``OCEAN_USE_SIMD``; enabled unless set to 0/false/no/off."""
    value = os.environ.get("OCEAN_USE_SIMD", "1").strip().lower()
    return value not in ("0", "false", "no", "off")


def get_transform_engine(vectorized=None):
    """Return the vectorized engine or the scalar reference engine.

    Args:
        vectorized: ``True`` for :class:`VectorizedTransformEngine`, ``False``
            for :class:`ScalarTransformEngine`, ``None`` to use
            :func:`use_simd_default`.
    """
    if vectorized is None:
        vectorized = use_simd_default()
    if vectorized:
        return VectorizedTransformEngine()
    return ScalarTransformEngine()


def dft_1d(samples, engine=None):
    """Forward 1D transform with ``engine`` or the default engine."""
    engine = engine or get_transform_engine()
    return engine.transform_1d(Direction.FORWARD, samples)


def idft_1d(samples, engine=None):
    """Unnormalized inverse 1D transform."""
    engine = engine or get_transform_engine()
    return engine.transform_1d(Direction.INVERSE, samples)


def dft_2d(grid, engine=None):
    """Forward 2D transform with ``engine`` or the default engine."""
    engine = engine or get_transform_engine()
    return engine.transform_2d(Direction.FORWARD, grid)


def idft_2d(grid, engine=None):
    """Unnormalized inverse 2D transform; divide by ``grid.size`` for a round trip."""
    engine = engine or get_transform_engine()
    return engine.transform_2d(Direction.INVERSE, grid)
