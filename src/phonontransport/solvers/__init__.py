from phonontransport.solvers.solver import SimulationSettings, TransportSolver

__all__ = ["SimulationSettings", "TransportSolver"]
