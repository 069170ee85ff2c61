"""
Grid helpers shared by the models and controllers.

All placed coordinates are integer multiples of GRID_SIZE.
"""

GRID_SIZE = 20


def snap_value(value: float, grid_size: int = GRID_SIZE) -> int:
    """Snap a single coordinate to the nearest grid line."""
    return int(round(value / grid_size)) * grid_size


def snap_point(x: float, y: float, grid_size: int = GRID_SIZE) -> tuple[int, int]:
    """Snap an (x, y) pair to the grid."""
    return snap_value(x, grid_size), snap_value(y, grid_size)


def is_on_grid(x: float, y: float, grid_size: int = GRID_SIZE) -> bool:
    return x % grid_size == 0 and y % grid_size == 0
