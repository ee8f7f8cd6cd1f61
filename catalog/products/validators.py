import uuid
from decimal import Decimal
from typing import List, Optional

from .schemas import CreateProductDto, UpdateProductDto

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
IMAGE_URL_MAX_LENGTH = 500
PRICE_MAX = Decimal("999999.99")
CENT = Decimal("0.01")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _has_sub_cent_digits(price: Decimal) -> bool:
    # Prices are stored as NUMERIC(18, 2).
    return 0 < price <= PRICE_MAX and price != price.quantize(CENT)


def _text_and_price_errors(name: Optional[str], description: Optional[str], price: Decimal) -> List[str]:
    errors = []

    if _is_blank(name):
        errors.append("Product name is required")
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(f"Product name cannot exceed {NAME_MAX_LENGTH} characters")

    if _is_blank(description):
        errors.append("Product description is required")
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Product description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    if price <= 0:
        errors.append("Price must be greater than zero")
    if price > PRICE_MAX:
        errors.append(f"Price cannot exceed {PRICE_MAX}")
    if _has_sub_cent_digits(price):
        errors.append("Price cannot have more than 2 decimal places")

    return errors


def _image_url_too_long(image_url: Optional[str]) -> bool:
    return not _is_blank(image_url) and len(image_url) > IMAGE_URL_MAX_LENGTH


def validate_create(dto: CreateProductDto) -> List[str]:
    """Return every rule the creation request breaks, in a stable order."""
    errors = _text_and_price_errors(dto.name, dto.description, dto.price)

    if dto.stock_quantity < 0:
        errors.append("Stock quantity cannot be negative")

    if _image_url_too_long(dto.image_url):
        errors.append(f"Image URL cannot exceed {IMAGE_URL_MAX_LENGTH} characters")

    if dto.category_id is None or dto.category_id == uuid.UUID(int=0):
        errors.append("Category ID is required")

    return errors


def validate_update(dto: UpdateProductDto) -> List[str]:
    """Same as creation minus stock and category, which updates cannot change."""
    errors = _text_and_price_errors(dto.name, dto.description, dto.price)

    if _image_url_too_long(dto.image_url):
        errors.append(f"Image URL cannot exceed {IMAGE_URL_MAX_LENGTH} characters")

    return errors
