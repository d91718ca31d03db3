"""Cart endpoints.

Authenticated callers own a cart by user id; everyone else gets a guest
token in a cookie on their first cart interaction.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response

from candleshop.application.add_cart_item import AddCartItemHandler
from candleshop.application.clear_cart import ClearCartHandler
from candleshop.application.dto import Caller
from candleshop.application.get_cart import GetCartHandler
from candleshop.application.merge_cart import MergeCartHandler
from candleshop.application.update_cart_item import RemoveCartItemHandler, UpdateCartItemHandler
from candleshop.infrastructure.api.dependencies import ensure_identity, get_caller, get_container
from candleshop.infrastructure.api.presenters import cart_json, skipped_json
from candleshop.infrastructure.api.schemas import (
    AddCartItemPayload,
    CustomizationPayload,
    MergeCartPayload,
    UpdateCartItemPayload,
)
from candleshop.infrastructure.bootstrap import Container

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("")
def get_cart(
    response: Response,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    caller = ensure_identity(caller, response, container.settings)
    cart = GetCartHandler(container.carts, container.settings.cart_retention).handle(caller)
    return {"success": True, "data": cart_json(cart, container.products)}


@router.post("/items")
def add_item(
    response: Response,
    payload: AddCartItemPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    caller = ensure_identity(caller, response, container.settings)
    handler = AddCartItemHandler(
        container.carts, container.products, container.options, container.settings.cart_retention
    )
    cart = handler.handle(
        caller,
        product_id=payload.product_id or "",
        quantity=payload.quantity if payload.quantity is not None else 0,
        combination=(payload.customizations or CustomizationPayload()).to_combination(),
    )
    return {"success": True, "message": "Item added to cart", "data": cart_json(cart, container.products)}


@router.put("/items/{item_id}")
def update_item(
    item_id: str,
    payload: UpdateCartItemPayload,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    handler = UpdateCartItemHandler(container.carts, container.products)
    quantity = payload.quantity if payload.quantity is not None else 0
    cart = handler.handle(caller, item_id, quantity)
    return {"success": True, "message": "Cart item updated", "data": cart_json(cart, container.products)}


@router.delete("/items/{item_id}")
def remove_item(
    item_id: str,
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    cart = RemoveCartItemHandler(container.carts).handle(caller, item_id)
    return {"success": True, "message": "Item removed from cart", "data": cart_json(cart, container.products)}


@router.delete("")
def clear_cart(caller: Caller = Depends(get_caller), container: Container = Depends(get_container)):
    cart = ClearCartHandler(container.carts).handle(caller)
    return {"success": True, "message": "Cart cleared", "data": cart_json(cart, container.products)}


@router.post("/merge")
def merge_cart(
    response: Response,
    payload: MergeCartPayload | None = Body(default=None),
    caller: Caller = Depends(get_caller),
    container: Container = Depends(get_container),
):
    guest_id = (payload.guest_id if payload else None) or caller.guest_id or ""
    handler = MergeCartHandler(
        container.carts,
        container.products,
        container.options,
        transactions=container.store,
        retention=container.settings.cart_retention,
    )
    result = handler.handle(caller, guest_id)
    response.delete_cookie(container.settings.guest_cookie_name)
    message = "Carts merged successfully" if result.merged or result.skipped else "No guest cart to merge"
    return {
        "success": True,
        "message": message,
        "data": cart_json(result.cart, container.products),
        "skipped": skipped_json(result.skipped),
    }
