"""
Pydantic schemas for the Product endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class ProductPayload(BaseModel):
    """
    Body of POST /product and PUT /product/{id}.

    Both fields are required. `price` must be a positive JSON integer: strings,
    floats, booleans and zero are rejected. Unknown keys are ignored.
    """

    code: StrictStr = Field(..., min_length=1)
    price: StrictInt = Field(..., gt=0)


class ProductRead(BaseModel):
    """
    Wire representation of a Product.

    Field names are camelCase on the wire (`createdAt`, ...). This model is also
    the source the frontend generator reads the `Product` interface from.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    code: str
    price: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def dump(cls, product) -> dict:
        """Serialize an ORM Product to its JSON-ready wire dict."""
        return cls.model_validate(product).model_dump(mode="json", by_alias=True)
