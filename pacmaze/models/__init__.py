# Model package init
from .saved_map import DIFFICULTIES, SavedMap  # noqa: F401 re-export

__all__ = [
    "DIFFICULTIES",
    "SavedMap",
]
