"""Base type for domain events of every bounded context."""

from __future__ import annotations

from abc import ABC, abstractmethod

__all__ = ["DomainEvent"]


class DomainEvent(ABC):
    """A domain event; concrete events name themselves."""

    @abstractmethod
    def event_name(self) -> str:
        """Return the dotted event name, e.g. ``order.paid``."""