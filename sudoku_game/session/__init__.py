"""Session module: the live game and its clock."""

from .session import GameSession, SessionState
from .timer import RepeatingTimer

__all__ = ["GameSession", "SessionState", "RepeatingTimer"]
