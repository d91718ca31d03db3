"""Request bodies accepted by the HTTP API.

Fields are camelCase on the wire and snake_case in Python.  Most fields
are optional here on purpose: required-ness and formats are checked by
the domain so the client gets the same field-level messages whichever
entry point it uses.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from candleshop.domain.model.combination import Combination


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomizationPayload(ApiModel):
    scent_id: str | None = None
    color_id: str | None = None
    size_id: str | None = None

    def to_combination(self) -> Combination:
        return Combination.from_mapping(self.model_dump())


class AddCartItemPayload(ApiModel):
    product_id: str | None = None
    quantity: int | None = None
    customizations: CustomizationPayload | None = None


class UpdateCartItemPayload(ApiModel):
    quantity: int | None = None


class MergeCartPayload(ApiModel):
    guest_id: str | None = None


class AddressPayload(ApiModel):
    first_name: str | None = None
    last_name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class PaymentPayload(ApiModel):
    method: str | None = None
    transaction_id: str | None = None


class CheckoutPayload(ApiModel):
    cart_id: str | None = None
    email: str | None = None
    shipping_address: AddressPayload | None = None
    billing_address: AddressPayload | None = None
    payment_details: PaymentPayload | None = None


class ValidateCheckoutPayload(ApiModel):
    cart_id: str | None = None
    shipping_address: AddressPayload | None = None
    billing_address: AddressPayload | None = None


class ShippingPayload(ApiModel):
    # Shipping is a flat policy; the destination does not change the quote.
    cart_id: str | None = None


class OrderStatusPayload(ApiModel):
    status: str | None = None
    tracking_number: str | None = None
    send_notification: bool = True
    notification_message: str | None = None


def address_dict(payload: AddressPayload | None) -> dict[str, Any] | None:
    return payload.model_dump() if payload is not None else None


class TrackingPayload(ApiModel):
    tracking_number: str | None = None
    carrier: str | None = None
    send_notification: bool = True
