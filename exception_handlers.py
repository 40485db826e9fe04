# exception_handlers.py
"""
Maps rental core errors to HTTP responses.

Every error body is {"detail": <message>, "code": <machine-readable code>}.
Database and unexpected errors are logged with their traceback and reported
as a generic 500; the request session has already been rolled back by
database.get_session.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from errors import (
     ConflictError,
     DomainValidationError,
     ForbiddenError,
     NotFoundError,
     RentalError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
     (NotFoundError, status.HTTP_404_NOT_FOUND),
     (ConflictError, status.HTTP_409_CONFLICT),
     (ForbiddenError, status.HTTP_403_FORBIDDEN),
     (DomainValidationError, status.HTTP_400_BAD_REQUEST),
)


def status_code_for(exc: RentalError) -> int:
     for error_type, status_code in STATUS_BY_ERROR:
          if isinstance(exc, error_type):
               return status_code
     return status.HTTP_400_BAD_REQUEST


def _error_body(detail: str, code: str) -> dict:
     return {"detail": detail, "code": code}


def register_exception_handlers(app: FastAPI) -> None:

     @app.exception_handler(RentalError)
     async def rental_error_handler(request: Request, exc: RentalError):
          status_code = status_code_for(exc)
          logger.info("%s %s -> %s %s: %s", request.method, request.url.path, status_code, exc.code, exc.message)
          return JSONResponse(status_code=status_code, content=_error_body(exc.message, exc.code))

     @app.exception_handler(SQLAlchemyError)
     async def database_error_handler(request: Request, exc: SQLAlchemyError):
          logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
          return JSONResponse(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               content=_error_body("Internal server error", "INTERNAL_ERROR"),
          )

     # Catch all unhandled exceptions
     @app.exception_handler(Exception)
     async def generic_exception_handler(request: Request, exc: Exception):
          logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
          return JSONResponse(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               content=_error_body("Internal server error", "INTERNAL_ERROR"),
          )
