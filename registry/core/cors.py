"""CORS: her yanıtta (hatalar dahil) Origin yansıtılır; OPTIONS her yolda 204 döner."""
from fastapi import Request
from fastapi.responses import Response

ALLOW_METHODS = "GET,POST,DELETE,OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"


def cors_headers(request: Request) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": request.headers.get("origin") or "*",
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }


async def cors_middleware(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=cors_headers(request))
    response = await call_next(request)
    response.headers.update(cors_headers(request))
    return response
