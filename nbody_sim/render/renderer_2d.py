"""2D snapshot renderer using matplotlib."""

import numpy as np
from matplotlib import colormaps
from matplotlib.figure import Figure
from typing import Optional, Tuple


class Renderer2D:
    """Scatter plot of body positions, written to an image file.

    Uses a bare ``Figure`` so no GUI backend is needed.
    """

    def __init__(
        self,
        figsize: Tuple[int, int] = (8, 8),
        dpi: int = 100,
        color_by_velocity: bool = True,
        size_by_mass: bool = True,
        title: str = "N-body Simulation"
    ):
        """Initialize 2D renderer.

        Args:
            figsize: Figure size (width, height)
            dpi: Dots per inch
            color_by_velocity: Color bodies by speed
            size_by_mass: Size bodies by mass
            title: Plot title
        """
        self.figsize = figsize
        self.dpi = dpi
        self.color_by_velocity = color_by_velocity
        self.size_by_mass = size_by_mass
        self.title = title

    def render(self, positions: np.ndarray, velocities: Optional[np.ndarray] = None,
               masses: Optional[np.ndarray] = None) -> Figure:
        """Build a figure for one snapshot."""
        positions = np.asarray(positions, dtype=float).reshape(-1, 2)
        fig = Figure(figsize=self.figsize, dpi=self.dpi)
        ax = fig.add_subplot(1, 1, 1)
        ax.set_aspect('equal')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_title(self.title)
        ax.grid(True, alpha=0.3)

        n_bodies = positions.shape[0]
        if n_bodies == 0:
            return fig

        if self.color_by_velocity and velocities is not None:
            speed = np.linalg.norm(np.asarray(velocities, dtype=float).reshape(-1, 2), axis=1)
            colors = (speed - speed.min()) / (speed.max() - speed.min() + 1e-10)
            colors = colormaps["viridis"](colors)
        else:
            colors = 'blue'

        if self.size_by_mass and masses is not None:
            masses_np = np.asarray(masses, dtype=float).flatten()
            sizes = 10 + 50 * (masses_np / masses_np.max())
        else:
            sizes = 20.0

        ax.scatter(positions[:, 0], positions[:, 1], c=colors, s=sizes,
                   alpha=0.8, edgecolors='black', linewidths=0.5)

        margin = 0.15
        x_min, x_max = positions[:, 0].min(), positions[:, 0].max()
        y_min, y_max = positions[:, 1].min(), positions[:, 1].max()
        max_range = max(x_max - x_min, y_max - y_min, 1.0) * (1 + margin)
        x_center = (x_max + x_min) / 2
        y_center = (y_max + y_min) / 2
        ax.set_xlim(x_center - max_range / 2, x_center + max_range / 2)
        ax.set_ylim(y_center - max_range / 2, y_center + max_range / 2)
        return fig

    def save(self, output_path: str, positions: np.ndarray, velocities: Optional[np.ndarray] = None,
             masses: Optional[np.ndarray] = None):
        """Render a snapshot and write it to output_path (format from suffix)."""
        fig = self.render(positions, velocities, masses)
        fig.savefig(output_path)
