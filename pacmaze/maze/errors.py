"""Exception types raised by the maze package."""


class MazeError(Exception):
    """Base class for maze generation errors."""


class InvalidAdjacencyError(MazeError):
    """Raised when an edge is addressed between two cells that are not grid neighbours.

    This always points at a bug in a planner pass or carving stage, never at
    bad runtime input.
    """

    def __init__(self, a, b):
        super().__init__(f"cells {a} and {b} are not adjacent")
        self.a = a
        self.b = b


class WallDataError(MazeError):
    """Raised when a serialized wall layout has the wrong shape."""


__all__ = ["MazeError", "InvalidAdjacencyError", "WallDataError"]
