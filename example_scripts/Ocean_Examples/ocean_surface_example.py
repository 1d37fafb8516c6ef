# -*- coding: utf-8 -*-
"""
Generate an ocean surface from a Phillips spectrum, show the height and normal
maps, export them as TGA textures and write a short time sweep of surface meshes.
"""

import os
import sys

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from ocean_utilities.export import save_height_map, save_normal_map, save_surface_mesh
from ocean_utilities.ocean import OceanGenerator
from ocean_utilities.ocean_params import SpectrumParameters
from ocean_utilities.visualization import plot_ocean_maps

#######################################################################################################################
# Input Parameters
#######################################################################################################################

grid_size = 128  # samples per side, power of two
ocean_size = 1000  # meters per side
wind_velocity = [31, 0]  # m/s
amplitude = 10
cutoff = 1  # small wavelength cutoff in meters
seed = 42
accurate_normals = True  # spectral differentiation instead of finite differences

time_stamps = np.linspace(0, 5, 11)
output_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "output")

#######################################################################################################################
# End Input Parameters
#######################################################################################################################

os.makedirs(output_path, exist_ok=True)

params = SpectrumParameters(Nx=grid_size, Ny=grid_size, Lx=ocean_size, Ly=ocean_size,
                            Vx=wind_velocity[0], Vy=wind_velocity[1], A=amplitude, l=cutoff, seed=seed)
generator = OceanGenerator(params)
generator.accurate_normal_map = accurate_normals

maps = generator.regenerate()
if maps is None:
    raise SystemExit(f"Invalid ocean parameters: {generator.param_errors!r}")
print(f"Height range: {maps.min_value:.4f} to {maps.max_value:.4f}")

save_height_map(os.path.join(output_path, "height.tga"), maps)
save_normal_map(os.path.join(output_path, "normal.tga"), maps)

for idx, time in enumerate(tqdm(time_stamps)):
    generator.pending_params = generator.pending_params.replace(t=float(time))
    frame = generator.regenerate()
    save_surface_mesh(os.path.join(output_path, f"ocean_{idx:03d}.vts"), frame)

plot_ocean_maps(maps)
plt.show()
