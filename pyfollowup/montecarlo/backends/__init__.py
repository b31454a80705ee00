"""
Computational backends for Monte Carlo methods.
"""

from pyfollowup.montecarlo.backends.cpu import CPUMilestoneBootstrapBackend

__all__ = ["CPUMilestoneBootstrapBackend"]
