"""Mapping of domain and port errors to HTTP errors."""

import logging

from fastapi import HTTPException, status

from domain.model.errors import (
    DomainError,
    DuplicateError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from port.account_repository import StorageError
from port.payment_gateway import PaymentDeclinedError, PaymentGatewayError

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases
_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (PreconditionError, status.HTTP_409_CONFLICT),
    (PaymentDeclinedError, status.HTTP_402_PAYMENT_REQUIRED),
    (PaymentGatewayError, status.HTTP_502_BAD_GATEWAY),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
]

HANDLED_ERRORS = (DomainError, PaymentGatewayError, StorageError)


def to_http_exception(error: Exception) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            if status_code >= 500:
                logger.error("Upstream failure", extra={"error": str(error), "type": type(error).__name__})
            return HTTPException(status_code=status_code, detail=str(error))

    logger.error("Unmapped domain error", extra={"error": str(error), "type": type(error).__name__})
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")
