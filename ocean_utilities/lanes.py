"""
Lane-packed complex arithmetic for the vectorized transform engine.

A ``ComplexPair`` keeps the real and imaginary parts of a group of complex
samples in two separate float64 arrays (``re`` and ``im``), the layout a
packed-register butterfly works on. In the general butterfly stages the
trailing axis holds two adjacent samples ``(j, j + 1)``; any leading axes
batch independent rows and blocks so that numpy applies the same operation to
all of them in lock-step.

Only named fields are used. Converting back to interleaved complex storage
goes through :meth:`ComplexPair.store`.
"""

import numpy as np


class ComplexPair:
    """Two float64 lane arrays holding the real and imaginary components."""

    __slots__ = ("re", "im")

    def __init__(self, re, im):
        self.re = re
        self.im = im

    @classmethod
    def load(cls, samples):
        """Unpack complex samples into separate real and imaginary lanes.

        The lanes are copies, so storing results back into ``samples`` does
        not alter operands that are still needed.
        """
        return cls(samples.real.copy(), samples.imag.copy())

    @classmethod
    def splat(cls, value):
        """Broadcast one complex value to both lanes."""
        value = complex(value)
        return cls(np.full(2, value.real), np.full(2, value.imag))

    @classmethod
    def from_lanes(cls, lane0, lane1):
        """Build a pair from two complex values, ``lane0`` first."""
        lane0 = complex(lane0)
        lane1 = complex(lane1)
        return cls(np.array([lane0.real, lane1.real]), np.array([lane0.imag, lane1.imag]))

    def store(self, out):
        """Interleave the lanes back into the complex array view ``out``."""
        out.real = self.re
        out.imag = self.im

    def to_complex(self):
        return self.re + 1j * self.im

    def __add__(self, other):
        return ComplexPair(self.re + other.re, self.im + other.im)

    def __sub__(self, other):
        return ComplexPair(self.re - other.re, self.im - other.im)

    def __mul__(self, other):
        # lane-wise complex product, real part first
        re = self.re * other.re - self.im * other.im
        im = self.re * other.im + self.im * other.re
        return ComplexPair(re, im)

    def swap(self):
        """Exchange the real and imaginary lanes."""
        return ComplexPair(self.im, self.re)

    def mask(self, re_sign, im_sign):
        """Multiply the real and imaginary lanes by the given signs."""
        return ComplexPair(self.re * re_sign, self.im * im_sign)

    def __repr__(self):
        return f"ComplexPair(re={self.re!r}, im={self.im!r})"
