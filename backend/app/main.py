import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.db import Base, engine
from app.core.errors import StorefrontError
from app.core.logging import setup_logging
from app.api import categories, inventory, orders, products, store

# Import models so Base.metadata knows them
import app.models  # noqa

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Storefront Back Office API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Create tables (Alembic optional)
Base.metadata.create_all(bind=engine)

app.include_router(products.router)
app.include_router(categories.router)
app.include_router(store.router)
app.include_router(orders.router)
app.include_router(inventory.router)


@app.get("/")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, log_level=settings.LOG_LEVEL.lower())
