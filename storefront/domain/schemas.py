# storefront/domain/schemas.py
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, EmailStr
from typing import List
from decimal import Decimal
from datetime import datetime


class _CamelModel(BaseModel):
    """JSON po stronie klienta uzywa camelCase, python snake_case."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# =====================================================
# AUTH / USER
# =====================================================
class RegisterIn(_CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=100, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=100, alias="lastName")


class LoginIn(_CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(_CamelModel):
    user_id: int = Field(..., serialization_alias="userId")
    email: str
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")


class ProfileOut(UserOut):
    created_at: datetime = Field(..., serialization_alias="createdAt")
    last_login_at: datetime | None = Field(None, serialization_alias="lastLoginAt")


class ProfileUpdateIn(_CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=100, alias="lastName")


class PasswordChangeIn(_CamelModel):
    current_password: str = Field(..., min_length=1, alias="currentPassword")
    new_password: str = Field(..., min_length=8, alias="newPassword")


# =====================================================
# PRODUCTS
# =====================================================
class ProductOut(_CamelModel):
    product_id: int = Field(
        ..., validation_alias=AliasChoices("id", "product_id", "productId"), serialization_alias="productId"
    )
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    category: str | None = None
    image_url: str | None = Field(None, serialization_alias="imageUrl")
    created_at: datetime | None = Field(None, serialization_alias="createdAt")


# =====================================================
# CART
# =====================================================
class CartItemIn(_CamelModel):
    product_id: int = Field(..., gt=0, alias="productId")
    quantity: int = Field(1, ge=1)


class CartItemUpdateIn(_CamelModel):
    quantity: int = Field(..., ge=1)


class CartItemOut(_CamelModel):
    cart_item_id: int = Field(..., serialization_alias="cartItemId")
    product_id: int = Field(..., serialization_alias="productId")
    name: str
    price: Decimal
    quantity: int
    stock: int
    image_url: str | None = Field(None, serialization_alias="imageUrl")
    subtotal: Decimal


class CartOut(_CamelModel):
    items: List[CartItemOut]
    total: Decimal
    item_count: int = Field(..., serialization_alias="itemCount")


# =====================================================
# ORDERS
# =====================================================
class CheckoutIn(_CamelModel):
    # brak adresu obsluguje serwis (InvalidRequest), nie walidacja schematu
    shipping_address: str | None = Field(None, alias="shippingAddress")


class CheckoutOut(_CamelModel):
    message: str = "Order placed successfully"
    order_id: int = Field(..., serialization_alias="orderId")
    total_amount: Decimal = Field(..., serialization_alias="totalAmount")


class OrderItemOut(_CamelModel):
    order_item_id: int = Field(..., serialization_alias="orderItemId")
    product_id: int = Field(..., serialization_alias="productId")
    name: str
    quantity: int
    price: Decimal
    image_url: str | None = Field(None, serialization_alias="imageUrl")


class OrderOut(_CamelModel):
    order_id: int = Field(..., serialization_alias="orderId")
    total_amount: Decimal = Field(..., serialization_alias="totalAmount")
    status: str
    shipping_address: str = Field(..., serialization_alias="shippingAddress")
    created_at: datetime = Field(..., serialization_alias="createdAt")


class OrderDetailOut(OrderOut):
    items: List[OrderItemOut]
