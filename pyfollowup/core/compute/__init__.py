"""
Shared compute infrastructure for pyfollowup.

IMPORTANT: This is NOT where domain-specific kernels live. Those go in
the private modules of each domain subpackage. This module contains
shared, domain-agnostic utilities.

Submodules:
    timing: Execution timing utilities
"""

from pyfollowup.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
