from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY, HTTP_503_SERVICE_UNAVAILABLE

from utilities.exceptions import DatabaseValidationError, FormValidationError


def _validation_failed(errors: list) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": {
                "message": "Validation failed",
                "errors": errors
            }
        }
    )


async def database_validation_exception_handler(request: Request, exc: DatabaseValidationError) -> JSONResponse:
    return _validation_failed([{
        "field": exc.field or "__root__",
        "message": exc.message,
        "type": "value_error"
    }])


async def form_validation_exception_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    return _validation_failed([
        {"field": field, "message": message, "type": "value_error.form"}
        for field, message in exc.errors.items()
    ])


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Custom validation exception handler with better error messages"""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_type = error.get("type", "validation_error")

        # Customize error messages for common validation errors
        if error_type == "string_type":
            message = f"Expected string value for field '{field}', got {error.get('input', 'invalid type')}"
        elif error_type == "list_type":
            message = f"Expected list value for field '{field}', got {error.get('input', 'invalid type')}"
        elif error_type == "missing":
            message = f"Field '{field}' is required"

        errors.append({
            "field": field,
            "message": message,
            "type": error_type
        })

    return _validation_failed(errors)


async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"[STORE_ERROR] {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "The invoice store is unavailable. Please try again."}
    )
