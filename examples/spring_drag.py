# examples/spring_drag.py
"""
Drives a SingleSpringSim the way a host application would: a canvas with
one view, a SimController routing synthetic pointer events, and a SimRunner
advancing the simulation between them.
"""
from physics_lab import LabConfig, SimRunner, setup_logging
from physics_lab.events import CanvasElement, Document, MouseEvent
from physics_lab.sims import SingleSpringSim
from physics_lab.types import DoubleRect
from physics_lab.view import LabCanvas, SimView, make_display

config = LabConfig.from_env()
setup_logging("DEBUG")

sim = SingleSpringSim()
canvas = CanvasElement(width=800, height=400, offset_width=800, offset_height=400)
document = Document()
lab = LabCanvas(canvas)
view = SimView("spring", DoubleRect(-4, -2, 4, 2), lab.get_screen_rect())
lab.add_view(view)
for obj in sim.get_sim_list():
    view.get_display_list().add(make_display(obj))

controller = config.make_controller(lab, sim, document=document)
runner = SimRunner(config.make_advance(sim))
runner.add_error_observer(controller)
history = config.make_history(sim.get_vars_list())
history.set_variables([0, 3])
runner.add_memo(history)

runner.advance_to(1.0)

# grab the block and pull it to x = 1
block_screen = view.get_coord_map().sim_to_screen(sim.block.position)
canvas.dispatch("mousedown", MouseEvent(block_screen[0], block_screen[1], target=canvas))
target = view.get_coord_map().sim_to_screen((1.0, 0.0))
document.dispatch("mousemove", MouseEvent(target[0], target[1]))
document.dispatch("mouseup", MouseEvent(target[0], target[1]))

runner.advance_to(3.0)
print(history.output())
