"""Lift feasibility, risk and trainee scoring engine for crane lift-planning training."""

__version__ = "0.1.0"
