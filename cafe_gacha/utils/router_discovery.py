import importlib
import pkgutil
from collections.abc import Iterator

from fastapi import APIRouter, FastAPI
from loguru import logger


def discover_routers(package_name: str = "cafe_gacha.api") -> Iterator[APIRouter]:
    """
    Yield the module-level ``router`` of every module in a package, recursively.

    Modules without a router (shared dependencies, helpers) are skipped.
    """
    package = importlib.import_module(package_name)

    for module_info in pkgutil.walk_packages(package.__path__, prefix=f"{package_name}."):
        if module_info.ispkg:
            continue

        module = importlib.import_module(module_info.name)
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            logger.info(f"Discovered router in {module_info.name}")
            yield router


def register_routers(app: FastAPI, prefix: str = "/api") -> None:
    """
    Register all routers in the cafe_gacha.api package with the FastAPI app.

    Args:
        app: The FastAPI app.
        prefix: The prefix to add to all routes.
    """
    for router in discover_routers():
        app.include_router(router, prefix=prefix)
