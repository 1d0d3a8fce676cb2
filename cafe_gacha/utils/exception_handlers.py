from typing import cast

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from cafe_gacha.core.exceptions import (
    BannerNotFoundError,
    GachaError,
    InsufficientFundsError,
    InvalidPullCountError,
    ItemNotFoundError,
    PlayerNotFoundError,
)
from cafe_gacha.schemas.common import APIResponse

GACHA_ERROR_STATUS: dict[type[GachaError], tuple[int, str]] = {
    BannerNotFoundError: (status.HTTP_404_NOT_FOUND, "banner_not_found"),
    ItemNotFoundError: (status.HTTP_404_NOT_FOUND, "item_not_found"),
    PlayerNotFoundError: (status.HTTP_404_NOT_FOUND, "player_not_found"),
    InvalidPullCountError: (status.HTTP_400_BAD_REQUEST, "invalid_pull_count"),
    InsufficientFundsError: (status.HTTP_402_PAYMENT_REQUIRED, "insufficient_funds"),
}


def http_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(HTTPException, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse(status="error", message=exc.detail).model_dump(),
    )


def validation_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(RequestValidationError, exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=APIResponse(
            status="error",
            message="Validation error",
            data=[
                {"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in exc.errors()
            ],
        ).model_dump(),
    )


def gacha_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(GachaError, exc)
    status_code, code = GACHA_ERROR_STATUS.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "gacha_error")
    )

    data = None
    if isinstance(exc, InsufficientFundsError):
        data = {
            "currency": exc.currency.value,
            "required": exc.required,
            "available": exc.available,
        }

    return JSONResponse(
        status_code=status_code,
        content=APIResponse(status="error", message=str(exc), code=code, data=data).model_dump(),
    )


def general_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=APIResponse(status="error", message=str(exc)).model_dump(),
    )
