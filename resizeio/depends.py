"""
FastAPI endpoint dependencies
"""
from fastapi import Request

from . import schemas
from .resizer import default_resizer


def get_resizer():
    yield default_resizer()


def get_request_context(request: Request) -> schemas.RequestContext:
    scheme = request.headers.get("x-forwarded-proto", request.url.scheme)
    return schemas.RequestContext(secure=scheme.split(",")[0].strip() == "https")
