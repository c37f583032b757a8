from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.exceptions import DomainError
from src.logger_config import get_logger

logger = get_logger('http')


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning(f'Domain error on {request.url.path}: {exc.message}')
    return JSONResponse(
        status_code=exc.status_code,
        content={'detail': exc.message, 'code': exc.code},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f'Unhandled exception: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
