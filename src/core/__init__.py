"""
Core domain models, mathematical primitives, and invariants.

This module contains the closed-form polynomial solvers and the value
objects they produce. Nothing here performs I/O.
"""
