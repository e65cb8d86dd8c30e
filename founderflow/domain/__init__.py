"""Domain models for normalized founder records."""

from .models import ContactChannelSet, NormalizedRecord

__all__ = ["ContactChannelSet", "NormalizedRecord"]
