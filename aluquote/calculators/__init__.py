"""
Deterministic weight calculators.

Pure Python math. Given an estimate input (or a list of takeoff items),
produce areas, lengths and weights in metric units.
"""
