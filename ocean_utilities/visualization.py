"""Height map and normal map display modes as a matplotlib figure."""

import matplotlib.pyplot as plt
import numpy as np


def plot_ocean_maps(maps, title=None, figsize=(10, 5)):
    """Show the height map (grayscale) next to the normal map (RGB).

    Returns:
        matplotlib.figure.Figure
    """
    fig, (ax_height, ax_normal) = plt.subplots(1, 2, figsize=figsize)

    vmin, vmax = maps.min_value, maps.max_value
    if vmax == vmin:
        vmax = vmin + 1

    im = ax_height.imshow(maps.height, cmap="gray", vmin=vmin, vmax=vmax,
                          origin="lower", interpolation="nearest")
    ax_height.set_title("Height map")
    fig.colorbar(im, ax=ax_height, fraction=0.046, pad=0.04, label="height [m]")

    ax_normal.imshow(np.clip(maps.normal, 0.0, 1.0), origin="lower", interpolation="nearest")
    ax_normal.set_title("Normal map")

    for ax in (ax_height, ax_normal):
        ax.set_xlabel("x")
        ax.set_ylabel("y")

    if title is None and maps.params is not None:
        p = maps.params
        title = f"{p.Nx}x{p.Ny}, wind ({p.Vx:g}, {p.Vy:g}) m/s, t={p.t:g} s, seed {p.seed}"
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig
