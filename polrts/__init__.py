"""Simulation core for a small real-time strategy game: geometry, polynomial roots, path finding, meshes, primitives, particles and scenes."""

__version__ = "0.1.0"
__all__ = ["mathutils", "polysolver", "pathfinding", "mesh", "primitives", "particles", "scene"]