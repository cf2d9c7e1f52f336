# MIT License (see LICENSE)
"""
Example simulations built on AbstractODESim.
"""
from .pendulum import PendulumSim
from .single_spring import SingleSpringSim

__all__ = ["PendulumSim", "SingleSpringSim"]
