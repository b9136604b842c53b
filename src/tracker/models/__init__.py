from .base import Base, UTCDateTime, metadata_obj
from .habit import Habit, HabitMode
from .habit_entry import HabitEntry

__all__ = [
    "metadata_obj",
    "Base",
    "UTCDateTime",
    "Habit",
    "HabitMode",
    "HabitEntry",
]
