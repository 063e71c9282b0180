"""
Deterministic material estimation engine.

Pure Python math. No state, no I/O.
Given a room's geometry and tile/grout/mortar parameters,
produce the tile count, mortar bags and grout mass it needs.
"""
