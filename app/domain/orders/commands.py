from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.orders.aggregates import OrderLine, OrderStatus


class OrderLineInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_ref: int = Field(alias="productId")
    product_name: str = Field(alias="productName", min_length=1, max_length=100)
    product_sku: str = Field(alias="productSku", min_length=1, max_length=50)
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(alias="unitPrice", ge=0)

    @field_validator("product_name", "product_sku")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_line(self) -> OrderLine:
        return OrderLine(
            product_ref=self.product_ref,
            product_name=self.product_name,
            product_sku=self.product_sku,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class CreateOrderCommand(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_ref: int = Field(alias="userId")
    shipping_address: str = Field(alias="shippingAddress", min_length=1, max_length=500)
    notes: str | None = Field(default=None, max_length=1000)
    items: list[OrderLineInput] = Field(min_length=1)

    @field_validator("shipping_address")
    @classmethod
    def _address_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_lines(self) -> list[OrderLine]:
        return [item.to_line() for item in self.items]


class StatusUpdateCommand(BaseModel):
    status: OrderStatus
