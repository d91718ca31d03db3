"""Application service: Merge Cart use case.

Runs when a guest logs in: the guest cart's items move into the user's
cart and the guest cart is deleted.  Items that can no longer be sold
are reported in the result instead of failing the whole merge.
"""

from __future__ import annotations

from datetime import timedelta

from candleshop.application.dto import Caller
from candleshop.application.get_cart import find_or_create_cart
from candleshop.application.ports import NoTransaction, TransactionManager
from candleshop.domain.exceptions import ValidationError
from candleshop.domain.model.cart import DEFAULT_RETENTION
from candleshop.domain.repository.cart_repository import CartRepository
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.cart_merge_service import CartMergeService, MergeResult
from candleshop.domain.service.customization_validator import CustomizationValidator


class MergeCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        option_repo: OptionRepository,
        transactions: TransactionManager | None = None,
        retention: timedelta = DEFAULT_RETENTION,
    ) -> None:
        self._cart_repo = cart_repo
        self._merger = CartMergeService(
            product_repo, CustomizationValidator(option_repo, product_repo)
        )
        self._transactions = transactions or NoTransaction()
        self._retention = retention

    def handle(self, caller: Caller, guest_id: str) -> MergeResult:
        user_id = caller.require_user()
        if not guest_id:
            raise ValidationError.for_field("guestId", "Guest ID is required")

        user_caller = Caller(user_id=user_id, role=caller.role)
        with self._transactions.transaction():
            user_cart = find_or_create_cart(self._cart_repo, user_caller, self._retention)
            guest_cart = self._cart_repo.get_by_guest(guest_id)
            if guest_cart is None or guest_cart.is_empty:
                return MergeResult(cart=user_cart)

            result = self._merger.merge(guest_cart, user_cart)
            self._cart_repo.save(user_cart)
            self._cart_repo.delete(guest_cart.id)
        return result
