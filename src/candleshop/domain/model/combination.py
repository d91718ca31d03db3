"""Combination value object: at most one option id per kind."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from candleshop.domain.model.identifiers import normalize_id
from candleshop.domain.model.option import OptionKind


@dataclass(frozen=True)
class Combination:
    """A client-chosen selection for one product.

    Any attribute may be omitted; the empty combination means "no
    customization" and is valid for every product.
    """

    scent_id: str | None = None
    color_id: str | None = None
    size_id: str | None = None

    def __post_init__(self) -> None:
        for kind in OptionKind:
            option_id = self.get(kind)
            if option_id:
                object.__setattr__(self, f"{kind.value}_id", normalize_id(option_id))

    def get(self, kind: OptionKind) -> str | None:
        return getattr(self, f"{kind.value}_id")

    def selections(self) -> Iterator[tuple[OptionKind, str]]:
        """Yield ``(kind, option_id)`` for each supplied id, scent first."""
        for kind in OptionKind:
            option_id = self.get(kind)
            if option_id:
                yield kind, option_id

    @property
    def is_empty(self) -> bool:
        return not any(True for _ in self.selections())

    def to_dict(self) -> dict[str, str | None]:
        return {
            "scentId": self.scent_id,
            "colorId": self.color_id,
            "sizeId": self.size_id,
        }

    @staticmethod
    def from_mapping(raw: Mapping[str, object] | None) -> Combination:
        """Accept both ``scentId`` and ``scent_id`` style keys; blanks become None."""
        raw = raw or {}

        def pick(kind: OptionKind) -> str | None:
            value = raw.get(f"{kind.value}Id", raw.get(f"{kind.value}_id"))
            if value is None or value == "":
                return None
            return str(value)

        return Combination(
            scent_id=pick(OptionKind.SCENT),
            color_id=pick(OptionKind.COLOR),
            size_id=pick(OptionKind.SIZE),
        )
