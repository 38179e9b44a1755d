from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from webshop.api.deps import ensure_session, set_session_cookie
from webshop.api.health import router as health_router
from webshop.api.routes_admin import router as admin_router
from webshop.api.routes_cart import router as cart_router
from webshop.api.routes_catalogue import router as catalogue_router
from webshop.api.routes_checkout import router as checkout_router
from webshop.config import settings
from webshop.db import init_db
from webshop.services.exceptions import ShopException, StorageError
from webshop.utils.log import configure_logging, get_logger

log = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; an exception here aborts the process
    configure_logging()
    init_db(reset=settings.RESET_DB)
    yield


app = FastAPI(title="Webshop - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def session_cookie_middleware(request: Request, call_next):
    # issued before routing so error responses carry the cookie too
    token, issued = ensure_session(request)
    response = await call_next(request)
    if issued:
        set_session_cookie(response, token)
    return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ShopException)
async def shop_exception_handler(request: Request, exc: ShopException):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    log.exception("Storage error on %s %s", request.method, request.url.path)
    err = StorageError("Storage error")
    return _error(err.status_code, err.message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router, tags=["cart"])

app.include_router(checkout_router, tags=["checkout"])

app.include_router(admin_router, tags=["admin"])


if __name__ == "__main__":
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
