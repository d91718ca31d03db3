"""Customization endpoints: option lists and combination validation."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from candleshop.application.show_customization_options import ShowCustomizationOptionsHandler
from candleshop.application.validate_customization import ValidateCustomizationHandler
from candleshop.infrastructure.api.dependencies import get_container
from candleshop.infrastructure.api.presenters import options_json
from candleshop.infrastructure.api.schemas import CustomizationPayload
from candleshop.infrastructure.bootstrap import Container

router = APIRouter(prefix="/api/products", tags=["customization"])


@router.post("/{product_id}/validate-customization")
def validate_customization(
    product_id: str,
    payload: CustomizationPayload | None = Body(default=None),
    container: Container = Depends(get_container),
):
    handler = ValidateCustomizationHandler(container.options, container.products)
    combination = (payload or CustomizationPayload()).to_combination()
    check = handler.handle(product_id, combination)
    return {
        "success": True,
        "isValid": check.is_valid,
        "message": check.message,
        "price": float(check.price),
    }


@router.get("/{product_id}/customization-options")
def customization_options(product_id: str, container: Container = Depends(get_container)):
    handler = ShowCustomizationOptionsHandler(container.options, container.products)
    return {"success": True, "data": options_json(handler.handle(product_id))}
