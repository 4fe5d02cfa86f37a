"""Procedural flower garden seeded along a heart curve."""

from heartgarden.canvas import Canvas
from heartgarden.garden import Garden, NoSurfaceError
from heartgarden.heart import HeartSeeder
from heartgarden.options import GardenOptions
from heartgarden.run import run
from heartgarden.scheduler import FrameScheduler

__all__ = ["Canvas", "FrameScheduler", "Garden", "GardenOptions", "HeartSeeder",
           "NoSurfaceError", "run"]
