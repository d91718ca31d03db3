"""Abstract repository for customization options."""

from __future__ import annotations

from abc import ABC, abstractmethod

from candleshop.domain.model.option import Option, OptionKind


class OptionRepository(ABC):

    @abstractmethod
    def get(self, kind: OptionKind, option_id: str) -> Option | None:
        """Return an option of the given kind by id, or None."""

    @abstractmethod
    def list_by_kind(self, kind: OptionKind) -> list[Option]:
        """Return every option of one kind."""

    @abstractmethod
    def save(self, option: Option) -> None:
        """Persist a new or updated option."""
