"""modules/observability: opt-in structured planning log."""

from itinerary_engine.modules.observability.logger import StructuredLogger

__all__ = ["StructuredLogger"]
