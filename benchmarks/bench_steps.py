"""
Microbenchmark: time per step for each solver.
Run:
  python benchmarks/bench_steps.py
"""
import time

from physics_lab.model.advance import SimpleAdvance
from physics_lab.model.solvers import SOLVERS, AdaptiveStepSolver, RungeKuttaSolver
from physics_lab.sims import PendulumSim, SingleSpringSim


def run(make_sim, solver_name: str, steps: int = 2000, dt: float = 0.025):
    sim = make_sim()
    if solver_name == "adaptive":
        solver = AdaptiveStepSolver(sim, sim, RungeKuttaSolver(sim))
    else:
        solver = SOLVERS[solver_name](sim)
    advance = SimpleAdvance(sim, solver, dt)

    # warmup
    for _ in range(30):
        advance.advance(dt)

    t0 = time.perf_counter()
    for _ in range(steps):
        advance.advance(dt)
    t1 = time.perf_counter()

    total = t1 - t0
    return total / steps


if __name__ == "__main__":
    for make_sim in (SingleSpringSim, PendulumSim):
        print(make_sim.__name__)
        for name in [*SOLVERS, "adaptive"]:
            per_step = run(make_sim, name)
            print(f"  {name:15s} step={1e6*per_step:9.1f} us  steps/s={1/per_step:10.1f}")
        print()
