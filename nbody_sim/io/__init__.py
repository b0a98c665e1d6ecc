"""Reporting and state export."""

from nbody_sim.io.report import format_bodies, format_summary, print_report
from nbody_sim.io.state_io import load_state, save_state

__all__ = ["format_bodies", "format_summary", "print_report", "save_state", "load_state"]
