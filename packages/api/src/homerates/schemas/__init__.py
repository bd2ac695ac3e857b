# This project was developed with assistance from AI tools.
"""Shared schema components."""

from typing import Literal

# How a percent-like input should be read. "auto" applies the (0, 1) heuristic.
PercentUnit = Literal["percent", "fraction", "auto"]
