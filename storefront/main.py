# storefront/main.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, setup_logging
from .core import AddToCartIn, CredentialsIn, ProductIn, _line_dict, _product_dict
from .errors import StoreError
from .service import Storefront

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> Storefront:
    return request.app.state.store

# ---------------------------
# Account endpoints
# ---------------------------
@router.post("/accounts/register", status_code=201)
async def register(payload: CredentialsIn, store: Storefront = Depends(get_store)):
    username = store.register(payload.username, payload.password)
    return {"username": username, "status": "registered"}

@router.post("/accounts/login")
async def login(payload: CredentialsIn, store: Storefront = Depends(get_store)):
    token = store.login(payload.username, payload.password)
    username = payload.username.strip()
    return {"token": token, "username": username, "is_admin": store.is_admin(token)}

@router.post("/accounts/logout")
async def logout(session_token: Optional[str] = Header(None), store: Storefront = Depends(get_store)):
    store.logout(session_token)
    return {"status": "logged out"}

# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/categories")
async def list_categories(store: Storefront = Depends(get_store)):
    return store.list_categories()

@router.get("/products")
async def list_products(category: Optional[str] = None, store: Storefront = Depends(get_store)):
    return [_product_dict(p) for p in store.list_products(category)]

@router.get("/products/search")
async def search_products(name: str = Query(..., min_length=1), store: Storefront = Depends(get_store)):
    return [_product_dict(p) for p in store.search_products(name)]

@router.get("/products/{product_id}")
async def get_product(product_id: int, store: Storefront = Depends(get_store)):
    return _product_dict(store.get_product(product_id))

@router.post("/admin/products", status_code=201)
async def add_product(payload: ProductIn, session_token: Optional[str] = Header(None),
                      store: Storefront = Depends(get_store)):
    p = store.add_product(session_token, payload.name, payload.category, payload.price, payload.stock)
    return _product_dict(p)

# ---------------------------
# Cart endpoints
# ---------------------------
def _cart_view(store: Storefront, token: Optional[str]):
    session = store.view_cart(token)
    return {
        "username": session.username,
        "items": [_line_dict(i, line) for i, line in enumerate(session.cart)],
        "total": str(session.cart.total()),
    }

@router.get("/cart")
async def view_cart(session_token: Optional[str] = Header(None), store: Storefront = Depends(get_store)):
    return _cart_view(store, session_token)

@router.post("/cart/add")
async def cart_add(payload: AddToCartIn, session_token: Optional[str] = Header(None),
                   store: Storefront = Depends(get_store)):
    store.add_to_cart(session_token, payload.product_id, payload.quantity)
    return _cart_view(store, session_token)

@router.delete("/cart/items/{index}")
async def cart_remove(index: int, session_token: Optional[str] = Header(None),
                      store: Storefront = Depends(get_store)):
    line = store.remove_from_cart(session_token, index)
    view = _cart_view(store, session_token)
    view["removed"] = _line_dict(index, line)
    return view

@router.post("/cart/checkout")
async def cart_checkout(session_token: Optional[str] = Header(None),
                        idempotency_key: Optional[str] = Header(None),
                        store: Storefront = Depends(get_store)):
    receipt = store.checkout(session_token, idempotency_key)
    return receipt.model_dump(mode="json")

# ---------------------------
# Orders
# ---------------------------
@router.get("/orders")
async def list_orders(session_token: Optional[str] = Header(None), store: Storefront = Depends(get_store)):
    return [o.model_dump(mode="json") for o in store.list_orders(session_token)]

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@router.post("/reset")
async def reset_all(seed: bool = True, store: Storefront = Depends(get_store)):
    store.reset(seed=seed)
    return {"status": "reset", "seeded": seed}


async def store_error_handler(request: Request, exc: StoreError):
    logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(store: Optional[Storefront] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if store is None:
        store = Storefront(
            admin_username=settings.admin_username,
            first_product_id=settings.first_product_id,
            seed=settings.seed_demo_data,
        )
    app = FastAPI(title="storefront (in-memory demo)")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.store = store
    app.state.settings = settings
    app.add_exception_handler(StoreError, store_error_handler)
    app.include_router(router)
    return app


app = create_app()


def run():
    import uvicorn
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
