"""Postal address value object used for shipping and billing."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields

from candleshop.domain.exceptions import ValidationError

_ZIP_CODE = re.compile(r"^\d{5}(-\d{4})?$")

_REQUIRED = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "street": "Street address is required",
    "city": "City is required",
    "state": "State is required",
    "zip_code": "Zip code is required",
    "country": "Country is required",
}


@dataclass(frozen=True)
class Address:
    first_name: str
    last_name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        errors = address_errors(self.to_dict())
        if errors:
            raise ValidationError("Invalid address information", errors)

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @staticmethod
    def from_dict(raw: Mapping[str, object]) -> Address:
        return Address(**{name: str(raw.get(name) or "") for name in _REQUIRED})


def address_errors(raw: Mapping[str, object] | None) -> dict[str, str]:
    """Return field -> message for everything wrong with ``raw``."""
    raw = raw or {}
    errors: dict[str, str] = {}
    for name, message in _REQUIRED.items():
        value = raw.get(name)
        if not isinstance(value, str) or not value.strip():
            errors[name] = message
    zip_code = raw.get("zip_code")
    if "zip_code" not in errors and not _ZIP_CODE.match(str(zip_code)):
        errors["zip_code"] = "Invalid zip code format (must be 12345 or 12345-6789)"
    return errors


def order_address_errors(
    shipping: Mapping[str, object] | None,
    billing: Mapping[str, object] | None,
) -> dict[str, str]:
    """Validate both order addresses, prefixing keys with ``shipping.`` / ``billing.``."""
    errors: dict[str, str] = {}
    for prefix, raw in (("shipping", shipping), ("billing", billing)):
        for name, message in address_errors(raw).items():
            errors[f"{prefix}.{name}"] = message
    return errors
