"""FastAPI endpoints for the Storefront.

Reads are open. Every mutation hands the caller's identity to the gate,
which refuses it before any state is touched when the identity is missing.
"""

from fastapi import APIRouter, Depends

from storefront.api.dependencies import current_identity, referer_origin
from storefront.api.schemas import (
    AddBasketItemRequest,
    AddProductToCategoryRequest,
    AuthResponse,
    CategoryIdResponse,
    CategoryResponse,
    CheckoutRequest,
    CheckoutResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    LoginRequest,
    ProductIdResponse,
    ProductResponse,
    RegisterUserRequest,
    ReviewRequest,
    SetSalePriceRequest,
    StatusResponse,
    StockChangeRequest,
    StockResponse,
    UserResponse,
)
from storefront.basket.items import AddBasketItem, ClearBasket, DecrementBasketItem, RemoveBasketItem
from storefront.basket.view import current_user, view_user
from storefront.catalogue.browsing import get_product, list_products
from storefront.catalogue.creation import CreateProduct, DeleteProduct
from storefront.catalogue.pricing import EndSale, SetSalePrice
from storefront.catalogue.stock import AddStock, RemoveStock
from storefront.categories.browsing import (
    get_category,
    get_category_by_name,
    list_categories,
    list_category_names,
)
from storefront.categories.management import AddProductToCategory, CreateCategory, DeleteCategory
from storefront.checkout.pipeline import checkout
from storefront.gate import dispatch, require_identity
from storefront.identity.authentication import authenticate, register_user
from storefront.reviews.moderation import AddReview, EditReview

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
account_router = APIRouter(tags=["account"])
basket_router = APIRouter(prefix="/basket", tags=["basket"])


def _caller_id(identity):
    # Basket commands need the caller's id before the gate sees them
    return require_identity(identity).user_id


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def products() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in list_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, identity=Depends(current_identity)) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        image_url=body.image_url,
        price=body.price,
        stock=body.stock,
    )
    result = dispatch(command, identity)
    return ProductIdResponse(product_id=result)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, identity=Depends(current_identity)) -> StatusResponse:
    dispatch(DeleteProduct(product_id=product_id), identity)
    return StatusResponse()


@product_router.post("/{product_id}/stock/add", response_model=StockResponse)
async def add_stock(product_id: str, body: StockChangeRequest, identity=Depends(current_identity)) -> StockResponse:
    stock = dispatch(AddStock(product_id=product_id, quantity=body.quantity), identity)
    return StockResponse(product_id=product_id, stock=stock)


@product_router.post("/{product_id}/stock/remove", response_model=StockResponse)
async def remove_stock(
    product_id: str, body: StockChangeRequest, identity=Depends(current_identity)
) -> StockResponse:
    stock = dispatch(RemoveStock(product_id=product_id, quantity=body.quantity), identity)
    return StockResponse(product_id=product_id, stock=stock)


@product_router.put("/{product_id}/sale", response_model=StatusResponse)
async def set_sale_price(
    product_id: str, body: SetSalePriceRequest, identity=Depends(current_identity)
) -> StatusResponse:
    dispatch(SetSalePrice(product_id=product_id, sale_price=body.sale_price), identity)
    return StatusResponse()


@product_router.delete("/{product_id}/sale", response_model=StatusResponse)
async def end_sale(product_id: str, identity=Depends(current_identity)) -> StatusResponse:
    dispatch(EndSale(product_id=product_id), identity)
    return StatusResponse()


@product_router.post("/{product_id}/reviews", status_code=201, response_model=ProductResponse)
async def add_review(product_id: str, body: ReviewRequest, identity=Depends(current_identity)) -> ProductResponse:
    dispatch(AddReview(product_id=product_id, username=body.username, body=body.body, rating=body.rating), identity)
    return ProductResponse.from_product(get_product(product_id))


@product_router.put("/{product_id}/reviews", response_model=ProductResponse)
async def edit_review(product_id: str, body: ReviewRequest, identity=Depends(current_identity)) -> ProductResponse:
    dispatch(EditReview(product_id=product_id, username=body.username, body=body.body, rating=body.rating), identity)
    return ProductResponse.from_product(get_product(product_id))


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(c) for c in list_categories()]


@category_router.get("/names", response_model=list[str])
async def category_names() -> list[str]:
    return list_category_names()


@category_router.get("/by-name/{name}", response_model=CategoryResponse)
async def category_by_name(name: str) -> CategoryResponse:
    view = get_category_by_name(name)
    return CategoryResponse.from_category(view.category, view.products)


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def category(category_id: str) -> CategoryResponse:
    view = get_category(category_id)
    return CategoryResponse.from_category(view.category, view.products)


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest, identity=Depends(current_identity)) -> CategoryIdResponse:
    result = dispatch(CreateCategory(name=body.name, image_url=body.image_url), identity)
    return CategoryIdResponse(category_id=result)


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, identity=Depends(current_identity)) -> StatusResponse:
    dispatch(DeleteCategory(category_id=category_id), identity)
    return StatusResponse()


@category_router.post("/{category_id}/products", response_model=StatusResponse)
async def add_product_to_category(
    category_id: str, body: AddProductToCategoryRequest, identity=Depends(current_identity)
) -> StatusResponse:
    dispatch(AddProductToCategory(category_id=category_id, product_id=body.product_id), identity)
    return StatusResponse()


# --- Account endpoints ---


@account_router.post("/users", status_code=201, response_model=AuthResponse)
def register(body: RegisterUserRequest) -> AuthResponse:
    result = register_user(body.username, body.email, body.password)
    return AuthResponse(token=result.token, user=UserResponse.from_view(view_user(result.user)))


@account_router.post("/auth/login", response_model=AuthResponse)
def login(body: LoginRequest) -> AuthResponse:
    result = authenticate(body.email, body.password)
    return AuthResponse(token=result.token, user=UserResponse.from_view(view_user(result.user)))


@account_router.get("/me", response_model=UserResponse)
async def me(identity=Depends(current_identity)) -> UserResponse:
    return UserResponse.from_view(current_user(identity))


@account_router.post("/checkout", response_model=CheckoutResponse)
def create_checkout(
    body: CheckoutRequest,
    identity=Depends(current_identity),
    origin: str | None = Depends(referer_origin),
) -> CheckoutResponse:
    session = checkout(identity, body.products, origin=origin)
    return CheckoutResponse(session_id=session.session_id, url=session.url)


# --- Basket endpoints ---


@basket_router.post("/items", response_model=UserResponse)
async def add_basket_item(body: AddBasketItemRequest, identity=Depends(current_identity)) -> UserResponse:
    command = AddBasketItem(user_id=_caller_id(identity), product_id=body.product_id, quantity=body.quantity)
    dispatch(command, identity)
    return UserResponse.from_view(current_user(identity))


@basket_router.delete("/items/{product_id}", response_model=UserResponse)
async def remove_basket_item(product_id: str, identity=Depends(current_identity)) -> UserResponse:
    dispatch(RemoveBasketItem(user_id=_caller_id(identity), product_id=product_id), identity)
    return UserResponse.from_view(current_user(identity))


@basket_router.post("/items/{product_id}/decrement", response_model=UserResponse)
async def decrement_basket_item(product_id: str, identity=Depends(current_identity)) -> UserResponse:
    dispatch(DecrementBasketItem(user_id=_caller_id(identity), product_id=product_id), identity)
    return UserResponse.from_view(current_user(identity))


@basket_router.delete("", response_model=UserResponse)
async def clear_basket(identity=Depends(current_identity)) -> UserResponse:
    dispatch(ClearBasket(user_id=_caller_id(identity)), identity)
    return UserResponse.from_view(current_user(identity))
