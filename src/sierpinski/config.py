# config.py
"""
Default constants shared by the generators and the viewer.
"""

import math

SIZE = 100.0  # Tetrahedron edge length
BURN_IN_STEPS = 20

# Point count control
MIN_POINTS = 10_000
MAX_POINTS = 1_000_000
POINT_STEP = 10_000
INITIAL_POINTS = 10_000

# Rendering
POINT_SIZE = 1.5
WINDOW_SIZE = (1000, 800)
CAMERA_POSITION = (100.0, 150.0, 300.0)
CAMERA_FOV = 75.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0
GRID_SIZE = 200.0
GRID_DIVISIONS = 50


def clamp_point_count(value: int) -> int:
    """Snap a requested point count onto the UI grid [MIN_POINTS, MAX_POINTS]."""
    # Halfway counts round up
    steps = math.floor((value - MIN_POINTS) / POINT_STEP + 0.5)
    snapped = MIN_POINTS + steps * POINT_STEP
    return int(min(MAX_POINTS, max(MIN_POINTS, snapped)))
