"""
Transaction ids for request tracing.

Callers may send an ``X-Request-Id`` header; otherwise one is generated. The id
is exposed on ``request.state`` and echoed back in the response.
"""

import secrets
import string

from fastapi import Request

TRANSACTION_ID_HEADER = "X-Request-Id"

_ALPHABET = string.ascii_letters + string.digits


def new_transaction_id() -> str:
    return "tid_" + "".join(secrets.choice(_ALPHABET) for _ in range(10))


def transaction_id_from_request(request: Request) -> str:
    return request.headers.get(TRANSACTION_ID_HEADER) or new_transaction_id()


async def transaction_id_middleware(request: Request, call_next):
    """Attach a transaction id to the request and the response."""
    tid = transaction_id_from_request(request)
    request.state.transaction_id = tid
    response = await call_next(request)
    response.headers[TRANSACTION_ID_HEADER] = tid
    return response


def get_transaction_id(request: Request) -> str:
    """FastAPI dependency returning the current request's transaction id."""
    tid = getattr(request.state, "transaction_id", None)
    if tid is None:
        tid = transaction_id_from_request(request)
        request.state.transaction_id = tid
    return tid
