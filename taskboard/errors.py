import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

@contextmanager
def store_errors(db: Session, detail: str) -> Iterator[None]:
    # store failures never leak: roll back and answer with a generic 500
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception(detail)
        raise HTTPException(status_code=500, detail=detail)

async def unhandled_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("store error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "internal store error"})
