"""Rendering of simulation snapshots."""

from nbody_sim.render.renderer_2d import Renderer2D

__all__ = ["Renderer2D"]
