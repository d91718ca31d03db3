"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from candleshop.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None."""

    @abstractmethod
    def get_by_user(self, user_id: str) -> Cart | None:
        """Return the cart owned by an authenticated user, or None."""

    @abstractmethod
    def get_by_guest(self, guest_id: str) -> Cart | None:
        """Return the cart owned by a guest identifier, or None."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""

    @abstractmethod
    def delete(self, cart_id: str) -> None:
        """Remove a cart.  Missing carts are ignored."""

    @abstractmethod
    def delete_expired(self, now: datetime) -> int:
        """Remove carts whose ``expires_at`` has passed; return how many."""
