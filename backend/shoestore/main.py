"""
shoestore/main.py - FastAPI application entry point.

Public routers:
- /products  (catalog, read only)
- /cart      (caller's cart)
- /orders    (checkout and the caller's own orders)
- /users     (caller's profile)

Admin routers (prefix /admin, `admin` custom claim required):
- /admin/products  (CRUD + stock)
- /admin/orders    (listing, filters, status updates, statistics)

Run locally:
    uvicorn shoestore.main:app --reload
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shoestore.config import settings
from shoestore.core.errors import register_exception_handlers
from shoestore.routers import carts, orders, products, users

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Shoe Store API",
    description="Storefront and admin API for the shoe store.",
    version="1.0.0",
    debug=settings.debug,
)

# Configure CORS (allow front-end domain or all configured origins)
allow_origins = [origin.strip() for origin in settings.allowed_origins.split(',')] if settings.allowed_origins else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include public routers
app.include_router(products.router)
app.include_router(carts.router)
app.include_router(orders.router)
app.include_router(users.router)

# Include admin routers (with prefix /admin)
app.include_router(products.admin_router, prefix="/admin")
app.include_router(orders.admin_router, prefix="/admin")


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("shoestore.main:app", host="0.0.0.0", port=8000, reload=True)
