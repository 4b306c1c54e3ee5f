"""Lanechart: a lane-packed, directly editable Gantt timeline."""

__version__ = "0.1.0"
