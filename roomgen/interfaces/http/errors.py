"""Translation of domain errors into HTTP responses."""

from fastapi import HTTPException, status

from roomgen.domain.generations import GenerationError


def http_error(exc: GenerationError) -> HTTPException:
    return HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": exc.message},
    )


def internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"code": "InternalError", "message": "Internal server error"},
    )
