"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ceramic Pour-Over Set",
                    "description": "Hand-glazed dripper with a matching carafe.",
                    "image_url": "https://cdn.example.com/img/pour-over.jpg",
                    "price": 48.0,
                    "stock": 25,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str
    image_url: str = Field(..., max_length=500)
    price: float = Field(..., ge=0)
    stock: int = Field(0, ge=0)


class StockChangeRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 5}]}}

    quantity: int = Field(..., ge=1)


class SetSalePriceRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"sale_price": 39.0}]}}

    sale_price: float = Field(..., gt=0)


class ReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "jdoe",
                    "body": "Brews a clean cup and looks great on the counter.",
                    "rating": 5,
                }
            ]
        }
    }

    username: str = Field(..., max_length=50)
    body: str
    rating: int = Field(..., ge=1, le=5)


# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Kitchen", "image_url": "https://cdn.example.com/img/kitchen.jpg"}]
        }
    }

    name: str = Field(..., max_length=100)
    image_url: str = Field(..., max_length=500)


class AddProductToCategoryRequest(BaseModel):
    product_id: str


# --- Identity Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"username": "jdoe", "email": "jdoe@example.com", "password": "correct-horse"}]
        }
    }

    username: str = Field(..., max_length=50)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


# --- Basket / Checkout Request Schemas ---


class AddBasketItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(1, ge=1)


class CheckoutRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"products": ["prod-001", "prod-001", "prod-002"]}]}}

    products: list[str]


# --- Response Schemas ---


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductIdResponse(BaseModel):
    product_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class StockResponse(BaseModel):
    product_id: str
    stock: int


class ReviewResponse(BaseModel):
    id: str
    username: str
    body: str
    rating: int
    created_at: datetime | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    image_url: str
    price: float
    sale_price: float | None = None
    on_sale: bool
    effective_price: float
    stock: int
    rating: float
    review_count: int
    reviews: list[ReviewResponse] = []

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            image_url=product.image_url,
            price=product.price,
            sale_price=product.sale_price,
            on_sale=bool(product.on_sale),
            effective_price=product.effective_price,
            stock=product.stock,
            rating=product.rating,
            review_count=product.review_count,
            reviews=[
                ReviewResponse(
                    id=str(r.id),
                    username=r.username,
                    body=r.body,
                    rating=r.rating,
                    created_at=r.created_at,
                )
                for r in product.reviews
            ],
        )


class CategoryResponse(BaseModel):
    id: str
    name: str
    image_url: str
    product_count: int
    products: list[ProductResponse] | None = None

    @classmethod
    def from_category(cls, category, products=None) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            image_url=category.image_url,
            product_count=category.product_count,
            products=[ProductResponse.from_product(p) for p in products] if products is not None else None,
        )


class BasketLineResponse(BaseModel):
    product_id: str
    quantity: int
    date_added: datetime | None = None
    line_total: float
    product: ProductResponse | None = None


class OrderResponse(BaseModel):
    id: str
    products: list[str]
    purchase_date: datetime
    payment_session_id: str | None = None


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    basket: list[BasketLineResponse] = []
    basket_count: int = 0
    basket_units: int = 0
    basket_total: float = 0.0
    orders: list[OrderResponse] = []

    @classmethod
    def from_view(cls, view) -> UserResponse:
        user = view.user
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            basket=[
                BasketLineResponse(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    date_added=line.date_added,
                    line_total=round(line.line_total, 2),
                    product=ProductResponse.from_product(line.product) if line.product else None,
                )
                for line in view.lines
            ],
            basket_count=view.basket_count,
            basket_units=view.basket_units,
            basket_total=view.basket_total,
            orders=[
                OrderResponse(
                    id=str(o.id),
                    products=o.purchased_product_ids,
                    purchase_date=o.purchase_date,
                    payment_session_id=o.payment_session_id,
                )
                for o in user.orders
            ],
        )


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class CheckoutResponse(BaseModel):
    session_id: str
    url: str | None = None


class ErrorResponse(BaseModel):
    code: str
    message: str
