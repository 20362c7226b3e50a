"""Atlas Hex Charts

Hexagonal shot-chart aggregation: bins shot locations into a hexagonal
lattice, joins each occupied cell with its shot zone's player and league
averages, and derives the size-scaled hexagons and clamped colour
metrics a drawing layer needs.

Drawing the court and the hexagons is left to the caller; the output
records (or the vertex table from ``tables.records_to_frame``) are
plain data.
"""

__version__ = "0.1.0"
