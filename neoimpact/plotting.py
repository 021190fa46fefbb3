"""
3D visualization of orbit paths and body positions
"""
import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401

from neoimpact.astrodynamics import generate_orbit_path, position_at_time
from neoimpact.constants import KMPAU


def plot_orbits(bodies, julian_date=None, n_orbit_points: int = 200, ax=None, highlighted=None):
    """
    Plot the orbits of several bodies in 3D, in AU.

    Args:
        bodies: Mapping of name to OrbitalElementSet
        julian_date: If given, also mark each body's position at this date
        n_orbit_points: Number of points to plot for each orbit
        ax: Existing 3D axes to draw on; a new figure is created if None
        highlighted: Name of a body to draw emphasized

    Returns:
        The matplotlib Figure
    """
    if ax is None:
        fig = plt.figure(figsize=(10, 10))
        ax = fig.add_subplot(111, projection='3d')
    else:
        fig = ax.figure

    # Sun
    ax.scatter([0], [0], [0], c='gold', s=200, marker='o', label='Sun')

    for name, elements in bodies.items():
        path = np.asarray(generate_orbit_path(elements, n_orbit_points)) / KMPAU
        is_highlighted = name == highlighted
        line, = ax.plot(
            path[:, 0], path[:, 1], path[:, 2],
            linewidth=2.0 if is_highlighted else 0.8,
            alpha=1.0 if is_highlighted else 0.5,
            label=name
        )

        if julian_date is not None:
            pos = np.asarray(position_at_time(elements, julian_date).position) / KMPAU
            ax.scatter([pos[0]], [pos[1]], [pos[2]], color=line.get_color(), s=30)

    ax.set_xlabel('X (AU)')
    ax.set_ylabel('Y (AU)')
    ax.set_zlabel('Z (AU)')
    ax.legend(loc='upper right', fontsize=8)

    return fig


def plot_context(context, n_orbit_points: int = 200, ax=None):
    """
    Plot the tracked bodies of a SimulationContext at its current time.

    Perturbed bodies are drawn on their current orbits and the context's
    highlighted body, if any, is emphasized.
    """
    bodies = {name: tracked.elements for name, tracked in context.bodies.items()}
    return plot_orbits(
        bodies,
        julian_date=context.julian_date,
        n_orbit_points=n_orbit_points,
        ax=ax,
        highlighted=context.highlighted
    )
