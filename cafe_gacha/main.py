from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from cafe_gacha.core.config import settings
from cafe_gacha.core.db import create_tables, engine
from cafe_gacha.core.exceptions import GachaError
from cafe_gacha.services.catalog_loader import load_catalogs
from cafe_gacha.utils.exception_handlers import (
    gacha_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from cafe_gacha.utils.locks import PlayerLocks
from cafe_gacha.utils.router_discovery import register_routers


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None]:
    # A broken catalog raises CatalogIntegrityError here and aborts startup
    item_catalog, banner_catalog = load_catalogs(settings.catalog_path)
    app.state.item_catalog = item_catalog
    app.state.banner_catalog = banner_catalog
    app.state.player_locks = PlayerLocks()

    if settings.create_tables:
        await create_tables()

    yield

    await engine.dispose()


app = FastAPI(
    title="Cafe Gacha API",
    lifespan=app_lifespan,
    servers=[{"url": "http://localhost:8080", "description": "Local server"}],
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


register_routers(app)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(GachaError, gacha_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get("/")
async def healthz() -> str:
    return "OK"
