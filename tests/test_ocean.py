#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""End to end tests of ocean generation and the interactive generator state."""

import os
import sys
import unittest
from unittest import mock

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ocean_utilities.dft import ScalarTransformEngine, VectorizedTransformEngine
from ocean_utilities.ocean import OceanGenerator, generate_ocean
from ocean_utilities.ocean_params import (
    GradientMode,
    InvalidOceanParameters,
    OceanParamError,
    SpectrumParameters,
    validate_params,
)


class TestGenerateOcean(unittest.TestCase):

    def setUp(self):
        self.params = SpectrumParameters(Nx=32, Ny=32, Lx=1000, Ly=1000, Vx=31, Vy=0, A=10, l=1, t=0, seed=42)

    def test_reference_scenario_is_reproducible(self):
        for mode in GradientMode:
            first = generate_ocean(self.params, mode=mode)
            second = generate_ocean(SpectrumParameters(**vars(self.params)), mode=mode)
            np.testing.assert_array_equal(first.height, second.height)
            np.testing.assert_array_equal(first.normal, second.normal)
            self.assertEqual(first.height.shape, (32, 32))
            self.assertEqual(first.normal.shape, (32, 32, 3))
            self.assertGreater(first.max_value, 0)

    def test_scalar_and_vectorized_pipelines_agree(self):
        scalar = generate_ocean(self.params, engine=ScalarTransformEngine())
        vectorized = generate_ocean(self.params, engine=VectorizedTransformEngine())
        np.testing.assert_allclose(vectorized.height, scalar.height, rtol=1e-6, atol=1e-6 * scalar.max_value)

    def test_time_changes_heights_but_not_their_scale(self):
        start = generate_ocean(self.params)
        later = generate_ocean(self.params.replace(t=10.0))
        self.assertFalse(np.array_equal(start.height, later.height))

        rms_start = np.sqrt(np.mean(start.height.astype(float) ** 2))
        rms_later = np.sqrt(np.mean(later.height.astype(float) ** 2))
        self.assertGreater(rms_later, rms_start / 5)
        self.assertLess(rms_later, rms_start * 5)
        self.assertTrue(np.all(later.height >= 0))

    def test_seed_changes_heights(self):
        other = generate_ocean(self.params.reseeded(7))
        self.assertFalse(np.array_equal(generate_ocean(self.params).height, other.height))

    def test_invalid_parameters_are_rejected(self):
        with self.assertRaises(InvalidOceanParameters) as ctx:
            generate_ocean(self.params.replace(Nx=3, Lx=0))
        self.assertEqual(ctx.exception.errors,
                         OceanParamError.INVALID_GRID_SIZE | OceanParamError.INVALID_OCEAN_SIZE)

    def test_parameters_are_validated_once(self):
        with mock.patch("ocean_utilities.ocean_params.validate_params", wraps=validate_params) as check:
            generate_ocean(self.params)
            OceanGenerator(self.params).regenerate()
        self.assertEqual(check.call_count, 2)

    def test_result_keeps_inputs(self):
        maps = generate_ocean(self.params, mode=GradientMode.SPECTRAL)
        self.assertEqual(maps.params, self.params)
        self.assertIs(maps.mode, GradientMode.SPECTRAL)


class TestOceanGenerator(unittest.TestCase):

    def setUp(self):
        self.generator = OceanGenerator(SpectrumParameters(Nx=16, Ny=16, seed=11))

    def test_regenerate_keeps_seed(self):
        maps = self.generator.regenerate()
        self.assertIsNotNone(maps)
        self.assertIs(self.generator.maps, maps)
        self.assertEqual(self.generator.params.seed, 11)
        self.assertFalse(self.generator.param_errors)

    def test_invalid_pending_parameters_keep_previous_maps(self):
        maps = self.generator.regenerate()
        self.generator.pending_params = self.generator.pending_params.replace(Vx=0, Vy=0)
        self.assertIsNone(self.generator.regenerate())
        self.assertEqual(self.generator.param_errors, OceanParamError.INVALID_WIND_VELOCITY)
        self.assertIs(self.generator.maps, maps)
        self.assertEqual(self.generator.params.Vx, 31.0)

    def test_generate_with_new_seed(self):
        self.generator.generate_with_new_seed(seed=1234)
        self.assertEqual(self.generator.params.seed, 1234)
        self.assertEqual(self.generator.pending_params.seed, 1234)

        self.generator.generate_with_new_seed()
        self.assertEqual(self.generator.params, self.generator.pending_params)

    def test_fractional_grid_size_is_reported(self):
        self.generator.pending_params = self.generator.pending_params.replace(Nx=16.5)
        self.assertIsNone(self.generator.regenerate())
        self.assertEqual(self.generator.param_errors, OceanParamError.INVALID_GRID_SIZE)
        self.assertIsNone(self.generator.maps)

    def test_new_seed_not_applied_when_invalid(self):
        self.generator.pending_params = self.generator.pending_params.replace(Ny=24)
        self.assertIsNone(self.generator.generate_with_new_seed(seed=5))
        self.assertEqual(self.generator.pending_params.seed, 11)
        self.assertIsNone(self.generator.maps)

    def test_accurate_normal_map_toggle(self):
        self.assertFalse(self.generator.accurate_normal_map)
        self.generator.accurate_normal_map = True
        self.assertIs(self.generator.mode, GradientMode.SPECTRAL)
        self.assertIs(self.generator.regenerate().mode, GradientMode.SPECTRAL)

    def test_engine_flag(self):
        self.assertIsInstance(OceanGenerator(vectorized=False).engine, ScalarTransformEngine)
        self.assertIsInstance(OceanGenerator(vectorized=True).engine, VectorizedTransformEngine)


if __name__ == '__main__':
    unittest.main()
