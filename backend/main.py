# backend/main.py
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import init_db
from utils.errors import ShopError

# Router imports
from routes.cart import router as cart_router
from routes.orders import router as orders_router
from routes.products import router as products_router
from routes.wishlist import router as wishlist_router
from routes.admin import router as admin_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialization
init_db()

app = FastAPI(title="Storefront API", version="1.0.0")

# CORS: local dev frontend plus the configured deployment URL
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- ERROR RESPONSES ----
# Every failure reaches the client as {"message": ...}

@app.exception_handler(ShopError)
async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def _field_name(loc) -> str:
    # ("body", "productId") -> "productId"; whole-body errors have no field
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts) if parts else "body"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    missing = [_field_name(e["loc"]) for e in errors if e.get("type") == "missing"]
    if missing:
        message = f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required"
    else:
        first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}
        message = f"Invalid value for '{_field_name(first['loc'])}': {first['msg']}"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error", "error": str(exc)})


# Router registration
app.include_router(cart_router, prefix="/api")
app.include_router(orders_router, prefix="/api")
app.include_router(products_router, prefix="/api")
app.include_router(wishlist_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(logs_router, prefix="/api")

@app.get("/")
def read_root():
    return {"message": "Storefront API is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
