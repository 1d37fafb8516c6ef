#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Unit tests for the Phillips spectrum synthesis."""

import os
import sys
import unittest

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ocean_utilities.ocean_params import InvalidOceanParameters, SpectrumParameters
from ocean_utilities.spectrum import (
    GRAVITY,
    dispersion,
    draw_gaussian_pairs,
    phillips,
    synthesize_spectrum,
    wavenumbers,
)


class TestPhillips(unittest.TestCase):

    def test_zero_at_origin(self):
        self.assertEqual(float(phillips(0.0, 0.0, 31.0, 0.0, 1.0, 1.0)), 0.0)

    def test_zero_without_wind(self):
        kx, ky = np.meshgrid(np.linspace(-1, 1, 5), np.linspace(-1, 1, 5))
        np.testing.assert_array_equal(phillips(kx, ky, 0.0, 0.0, 1.0, 1.0), np.zeros((5, 5)))

    def test_zero_perpendicular_to_wind(self):
        self.assertEqual(float(phillips(0.0, 0.05, 31.0, 0.0, 1.0, 1.0)), 0.0)

    def test_matches_formula(self):
        kx, ky, vx, vy, a, l = 0.02, 0.01, 20.0, 5.0, 3.0, 0.5
        k2 = kx * kx + ky * ky
        v = np.hypot(vx, vy)
        big_l = v * v / GRAVITY
        cos_kv = (kx * vx + ky * vy) / (np.sqrt(k2) * v)
        expected = a * np.exp(-1 / (k2 * big_l ** 2)) / k2 ** 2 * cos_kv ** 2 * np.exp(-k2 * l * l)
        self.assertAlmostEqual(float(phillips(kx, ky, vx, vy, a, l)), expected, delta=expected * 1e-12)

    def test_symmetric_under_negation(self):
        kx, ky = np.meshgrid(np.linspace(0.001, 0.2, 7), np.linspace(-0.1, 0.1, 6))
        np.testing.assert_allclose(phillips(kx, ky, 10.0, 4.0, 1.0, 1.0),
                                   phillips(-kx, -ky, 10.0, 4.0, 1.0, 1.0), rtol=1e-14)

    def test_non_negative_and_finite(self):
        kx, ky = wavenumbers(SpectrumParameters(Nx=64, Ny=64))
        density = phillips(kx, ky, 31.0, 0.0, 1e-5, 1.0)
        self.assertTrue(np.all(np.isfinite(density)))
        self.assertTrue(np.all(density >= 0))

    def test_small_wavelength_cutoff_suppresses_high_k(self):
        low = float(phillips(2.0, 0.0, 31.0, 0.0, 1.0, 0.0))
        damped = float(phillips(2.0, 0.0, 31.0, 0.0, 1.0, 1.0))
        self.assertLess(damped, low * np.exp(-3.9))


class TestSpectrumBuildingBlocks(unittest.TestCase):

    def test_wavenumbers_layout(self):
        params = SpectrumParameters(Nx=8, Ny=4, Lx=100.0, Ly=50.0)
        kx, ky = wavenumbers(params)
        self.assertEqual(kx.shape, (4, 8))
        self.assertAlmostEqual(kx[0, 3], 2 * np.pi * 3 / 100.0)
        self.assertAlmostEqual(ky[2, 0], 2 * np.pi * 2 / 50.0)
        self.assertTrue(np.all(kx >= 0) and np.all(ky >= 0))

    def test_dispersion(self):
        self.assertAlmostEqual(float(dispersion(3.0, 4.0)), np.sqrt(GRAVITY * 5.0))
        self.assertEqual(float(dispersion(0.0, 0.0)), 0.0)

    def test_draw_order_is_row_major_four_per_cell(self):
        xi_a, xi_b = draw_gaussian_pairs(42, (2, 3))
        stream = np.random.default_rng(42).standard_normal(24)
        cell = 1 * 3 + 2  # y=1, x=2
        self.assertEqual(xi_a[1, 2], complex(stream[4 * cell], stream[4 * cell + 1]))
        self.assertEqual(xi_b[1, 2], complex(stream[4 * cell + 2], stream[4 * cell + 3]))
        self.assertEqual(xi_a[0, 0], complex(stream[0], stream[1]))


class TestSynthesizeSpectrum(unittest.TestCase):

    def setUp(self):
        self.params = SpectrumParameters(Nx=32, Ny=32, Lx=1000, Ly=1000, Vx=31, Vy=0, A=10, l=1, t=0, seed=42)

    def test_shape_and_dtype(self):
        spectrum = synthesize_spectrum(self.params.replace(Nx=16, Ny=8))
        self.assertEqual(spectrum.shape, (8, 16))
        self.assertEqual(spectrum.dtype, np.complex128)

    def test_deterministic(self):
        np.testing.assert_array_equal(synthesize_spectrum(self.params), synthesize_spectrum(self.params))

    def test_seed_changes_output(self):
        self.assertFalse(np.array_equal(synthesize_spectrum(self.params),
                                        synthesize_spectrum(self.params.reseeded(43))))

    def test_dc_term_is_zero(self):
        self.assertEqual(synthesize_spectrum(self.params)[0, 0], 0)

    def test_initial_amplitudes_at_time_zero(self):
        p = self.params
        kx, ky = wavenumbers(p)
        amplitude = p.A / (p.Lx * p.Ly)
        xi_a, xi_b = draw_gaussian_pairs(p.seed, p.shape)
        h0a = np.sqrt(phillips(kx, ky, p.Vx, p.Vy, amplitude, p.l) / 2) * xi_a
        h0b = np.conj(np.sqrt(phillips(-kx, -ky, p.Vx, p.Vy, amplitude, p.l) / 2) * xi_b)
        np.testing.assert_allclose(synthesize_spectrum(p), h0a + h0b, rtol=1e-12, atol=1e-20)

    def test_time_evolution_rotates_components(self):
        p0 = self.params
        p1 = self.params.replace(t=3.0)
        h_0 = synthesize_spectrum(p0)
        h_t = synthesize_spectrum(p1)
        self.assertFalse(np.array_equal(h_0, h_t))

        # only the phases of the two counter-rotating terms change
        kx, ky = wavenumbers(p0)
        amplitude = p0.A / (p0.Lx * p0.Ly)
        max_mag = np.sqrt(phillips(kx, ky, p0.Vx, p0.Vy, amplitude, p0.l) / 2)
        xi_a, xi_b = draw_gaussian_pairs(p0.seed, p0.shape)
        limit = max_mag * (np.abs(xi_a) + np.abs(xi_b))
        self.assertTrue(np.all(np.abs(h_t) <= limit * (1 + 1e-12) + 1e-30))

    def test_amplitude_scales_with_square_root_of_A(self):
        small = synthesize_spectrum(self.params)
        large = synthesize_spectrum(self.params.replace(A=40))
        np.testing.assert_allclose(large, small * 2, rtol=1e-12, atol=1e-30)

    def test_invalid_params_rejected(self):
        with self.assertRaises(InvalidOceanParameters):
            synthesize_spectrum(self.params.replace(Vx=0))


if __name__ == '__main__':
    unittest.main()
