"""Demos for the slicing core.

Each module exposes a run_* function callable from Python and a module-level
__main__ guard so it can be executed via:

    python -m demos.slice_demo
"""
from .slice_demo import run_slice_demo

__all__ = ['run_slice_demo']
