# MIT License (see LICENSE)
"""
Interaction and run loop: event routing from a LabCanvas to a simulation.

Typical usage:
    from physics_lab.app import SimController, SimRunner

    controller = SimController(lab_canvas, event_handler=sim)
    runner = SimRunner(SimpleAdvance(sim))
    runner.add_error_observer(controller)
"""
from .event_handler import EventHandler, ModifierKeys, modifiers_equal
from .mouse_tracker import MouseTracker, find_nearest_dragable
from .sim_controller import SimController
from .sim_runner import ErrorObserver, SimRunner
from .view_panner import ViewPanner

__all__ = [
    # Capability
    "EventHandler",
    "ModifierKeys",
    "modifiers_equal",
    # Drag routing
    "MouseTracker",
    "find_nearest_dragable",
    "ViewPanner",
    "SimController",
    # Run loop
    "SimRunner",
    "ErrorObserver",
]
