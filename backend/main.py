# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from config import settings
from database import init_db
import models.shoe  # noqa: F401  registers the tables
from routes.shoes import router as shoes_router
from routes.shoes_write import router as shoes_write_router
from resolvers.schema import graphql_router
from services.exceptions import (
    ArticleCodeExistsError,
    NotFoundError,
    VersionInvalidError,
    VersionOutdatedError,
)

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Shoe Catalog API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain errors -> HTTP status codes
def _error(status_code: int):
    async def handler(request: Request, exc: Exception):
        logger.debug("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    return handler


app.add_exception_handler(NotFoundError, _error(404))
app.add_exception_handler(ArticleCodeExistsError, _error(422))
app.add_exception_handler(VersionInvalidError, _error(412))
app.add_exception_handler(VersionOutdatedError, _error(412))

# Router registration
app.include_router(shoes_router)
app.include_router(shoes_write_router)
app.include_router(graphql_router, prefix="/graphql")


@app.get("/")
def read_root():
    return {"message": "Shoe Catalog API is running"}
