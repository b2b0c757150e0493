"""Position model and the sparse checkpoint index used to resolve offsets."""

from .positions import Position, Profile, initial_position
from .skiplist import PositionIndex, replay

__all__ = ["Position", "PositionIndex", "Profile", "initial_position", "replay"]
