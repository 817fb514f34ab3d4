"""
Request schemas for the JSON API.

Each request body is validated once at the HTTP boundary; the store engine
only ever sees well-formed input. Field names follow the camelCase wire
format of the storefront client.
"""
from decimal import Decimal
from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from storefront.exceptions import ValidationError
from storefront.models import CartItem
from storefront.utils.formatters import to_money


class RequestModel(BaseModel):
    """Base class for all request bodies."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class ItemPayload(RequestModel):
    id: str = Field(..., min_length=1, description="Product id")
    name: str = Field(..., min_length=1, description="Product name")
    price: Decimal = Field(..., ge=0, description="Unit price")
    quantity: Optional[StrictInt] = Field(None, ge=0, description="Units to add, 1 when missing or 0")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_numeric_id(cls, value: Union[str, int]):
        # Storefront catalogs sometimes send numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('price', mode='before')
    @classmethod
    def price_from_float(cls, value):
        if isinstance(value, float):
            return to_money(value)
        return value

    def to_cart_item(self) -> CartItem:
        return CartItem(id=self.id, name=self.name, price=self.price, quantity=self.quantity or 1)


class CartQuery(RequestModel):
    user_id: str = Field(..., alias='userId', min_length=1)


class AddToCartRequest(RequestModel):
    user_id: str = Field(..., alias='userId', min_length=1)
    item: ItemPayload


class UpdateQuantityRequest(RequestModel):
    user_id: str = Field(..., alias='userId', min_length=1)
    item_id: str = Field(..., alias='itemId', min_length=1)
    quantity_change: StrictInt = Field(..., alias='quantityChange')

    @field_validator('item_id', mode='before')
    @classmethod
    def coerce_numeric_item_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ApplyDiscountRequest(RequestModel):
    user_id: str = Field(..., alias='userId', min_length=1)
    discount_code: str = Field(..., alias='discountCode', min_length=1)


class CheckoutRequest(RequestModel):
    user_id: str = Field(..., alias='userId', min_length=1)


T = TypeVar('T', bound=RequestModel)


def _field_name(loc) -> str:
    return '.'.join(str(part) for part in loc) or 'body'


def parse_request(schema: Type[T], data) -> T:
    """
    Validate raw request data against a schema.

    Raises:
        ValidationError: listing every offending field.
    """
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        problems = [(_field_name(err['loc']), err['msg']) for err in e.errors()]
        fields = [name for name, _ in problems]
        message = 'Invalid request: ' + '; '.join(f'{name}: {msg}' for name, msg in problems)
        raise ValidationError(message, fields=fields) from e
