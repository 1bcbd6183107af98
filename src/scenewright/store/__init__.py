"""Document stores for screenplay aggregates."""

from scenewright.store.base import Direction, ScreenplayStore
from scenewright.store.memory import InMemoryScreenplayStore
from scenewright.store.sqlite import SQLiteScreenplayStore

__all__ = [
    "Direction",
    "InMemoryScreenplayStore",
    "SQLiteScreenplayStore",
    "ScreenplayStore",
]
