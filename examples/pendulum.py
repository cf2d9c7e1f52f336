# examples/pendulum.py
from physics_lab import LabConfig, SimRunner, setup_logging
from physics_lab.sims import PendulumSim
from physics_lab.sims.pendulum import TE, TH

config = LabConfig.from_env()
setup_logging(config.log_level)

sim = PendulumSim(history=config.history)
runner = SimRunner(config.make_advance(sim))

t_end = 10.0
while sim.get_time() < t_end:
    runner.advance_to(sim.get_time() + 1.0)
    va = sim.get_vars_list()
    print(f"t={sim.get_time():6.3f}  angle={va.get_value(TH):+.4f}  energy={va.get_value(TE):.4f}")
