from app.models.event import Event
from app.models.skill import Skill

__all__ = ["Event", "Skill"]
