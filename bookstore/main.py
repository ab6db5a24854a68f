# bookstore/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from bookstore.api.routers import auth, books, carts, categories, health, orders
from bookstore.data.database import Base, init_db
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")
    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 400 z komunikatami per pole
    errors = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        errors.append(f"{field}: {err.get('msg')}")
    return JSONResponse(status_code=400, content={"errors": errors})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bookstore Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(books.router)
    app.include_router(categories.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
