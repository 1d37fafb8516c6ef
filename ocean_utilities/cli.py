"""
Command line front end of the ocean generator.

Examples:
    oceantool --seed 42 --height-map height.tga --normal-map normal.tga
    oceantool --nx 256 --ny 256 --spectral --preview height.png
    oceantool --frames 60 --dt 0.1 --output-dir frames/
"""

import argparse
import logging
import os
import sys

from tqdm import tqdm

from ocean_utilities.dft import get_transform_engine, use_simd_default
from ocean_utilities.export import (
    save_height_map,
    save_normal_map,
    save_preview,
    save_surface_mesh,
)
from ocean_utilities.ocean import generate_ocean
from ocean_utilities.ocean_params import (
    GradientMode,
    SpectrumParameters,
    describe_errors,
    validate_params,
)

logger = logging.getLogger("ocean_utilities")


def build_parser():
    defaults = SpectrumParameters.default()
    parser = argparse.ArgumentParser(
        prog="oceantool",
        description="Generate ocean height and normal maps from a Phillips spectrum.",
    )
    ocean = parser.add_argument_group("ocean")
    ocean.add_argument("--nx", type=int, default=defaults.Nx, help="grid size in x (power of two)")
    ocean.add_argument("--ny", type=int, default=defaults.Ny, help="grid size in y (power of two)")
    ocean.add_argument("--lx", type=float, default=defaults.Lx, help="ocean size in x [m]")
    ocean.add_argument("--ly", type=float, default=defaults.Ly, help="ocean size in y [m]")
    ocean.add_argument("--vx", type=float, default=defaults.Vx, help="wind velocity x [m/s]")
    ocean.add_argument("--vy", type=float, default=defaults.Vy, help="wind velocity y [m/s]")
    ocean.add_argument("-A", "--amplitude", type=float, default=defaults.A)
    ocean.add_argument("-l", "--cutoff", type=float, default=defaults.l,
                       help="small wavelength cutoff [m]")
    ocean.add_argument("-t", "--time", type=float, default=defaults.t, help="simulation time [s]")

    seed = ocean.add_mutually_exclusive_group()
    seed.add_argument("--seed", type=int, default=defaults.seed)
    seed.add_argument("--new-seed", action="store_true", help="draw a random seed")

    parser.add_argument("--spectral", action="store_true",
                        help="accurate normal map by spectral differentiation (3 extra DFTs)")
    parser.add_argument("--scalar", action="store_true", default=not use_simd_default(),
                        help="use the scalar reference transform engine")

    output = parser.add_argument_group("output")
    output.add_argument("--height-map", metavar="PATH", help="height map TGA file")
    output.add_argument("--normal-map", metavar="PATH", help="normal map TGA file")
    output.add_argument("--preview", metavar="PATH", help="height map preview image (png, jpg, ...)")
    output.add_argument("--mesh", metavar="PATH", help="surface mesh (vts, vtk, stl, ply, ...)")
    output.add_argument("--frames", type=int, default=0,
                        help="write a time sweep of N height/normal map pairs")
    output.add_argument("--dt", type=float, default=0.1, help="time step of the sweep [s]")
    output.add_argument("--output-dir", default=".", help="directory of the time sweep frames")

    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def params_from_args(args):
    params = SpectrumParameters(
        Nx=args.nx, Ny=args.ny, Lx=args.lx, Ly=args.ly, Vx=args.vx, Vy=args.vy,
        A=args.amplitude, l=args.cutoff, t=args.time, seed=args.seed,
    )
    if args.new_seed:
        params = params.reseeded()
    return params


def write_time_sweep(params, mode, engine_flag, frames, dt, output_dir):
    os.makedirs(output_dir, exist_ok=True)
    engine = get_transform_engine(engine_flag)
    written = []
    for frame in tqdm(range(frames), desc="Generating frames"):
        frame_params = params.replace(t=params.t + frame * dt)
        maps = generate_ocean(frame_params, mode=mode, engine=engine)
        written.append(save_height_map(os.path.join(output_dir, f"height_{frame:04d}.tga"), maps))
        written.append(save_normal_map(os.path.join(output_dir, f"normal_{frame:04d}.tga"), maps))
    logger.info("Wrote %d frames to %s", frames, output_dir)
    return written


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    params = params_from_args(args)
    errors = validate_params(params)
    if errors:
        for message in describe_errors(errors):
            print(f"error: {message}", file=sys.stderr)
        return 2

    mode = GradientMode.SPECTRAL if args.spectral else GradientMode.FINITE_DIFFERENCE
    vectorized = not args.scalar

    if args.frames > 0:
        write_time_sweep(params, mode, vectorized, args.frames, args.dt, args.output_dir)
        return 0

    maps = generate_ocean(params, mode=mode, engine=get_transform_engine(vectorized))
    print(f"seed {params.seed}: height range [{maps.min_value:.6g}, {maps.max_value:.6g}]")

    if args.height_map:
        save_height_map(args.height_map, maps)
    if args.normal_map:
        save_normal_map(args.normal_map, maps)
    if args.preview:
        save_preview(args.preview, maps)
    if args.mesh:
        save_surface_mesh(args.mesh, maps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
