# backend/api/main.py
from __future__ import annotations

import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import RedirectResponse


log = logging.getLogger("uvicorn.error")

# --- Load .env early so os.getenv works everywhere ---
try:
    from dotenv import load_dotenv  # type: ignore
    load_dotenv()  # loads backend/api/.env if present
except ImportError:
    pass

from db.mock_data import seed_mock_data  # noqa: E402
from routes.alerts import router as alerts_router  # noqa: E402
from routes.emergency import router as emergency_router  # noqa: E402
from routes.incident import router as incident_router  # noqa: E402
from routes.safe_walks import router as safe_walks_router  # noqa: E402
from routes.user import router as user_router  # noqa: E402
from routes.zones import router as zones_router  # noqa: E402

# Global API prefix; the mobile client talks to http://localhost:3001/api
_API_PREFIX = os.getenv("API_PREFIX", "/api").strip()
if _API_PREFIX:
    if not _API_PREFIX.startswith("/"):
        _API_PREFIX = "/" + _API_PREFIX
    # avoid trailing slash so paths look like /api/alerts (not //alerts)
    _API_PREFIX = _API_PREFIX.rstrip("/")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fresh demo data on every start
    app.state.mock_db = seed_mock_data()
    log.info("Oasis Campus Safety API ready, endpoints under %s", _API_PREFIX or "/")
    yield


app = FastAPI(
    title="Oasis Campus Safety API",
    version="1.0.0",
    description="Mock backend for Oasis (users, alerts, incidents, danger zones, safe walks).",
    lifespan=lifespan,
)

# ---------------- CORS ----------------
# Prefer explicit origins via CORS_ORIGINS="https://app.example.com,https://staging.example.com"
# For local dev we allow any localhost/127.0.0.1 on any port.
cors_env = os.getenv("CORS_ORIGINS")
cors_kwargs = dict(allow_methods=["*"], allow_headers=["*"])

if cors_env:
    allow_origins = [o.strip() for o in cors_env.split(",") if o.strip()]
    cors_kwargs.update(
        allow_origins=allow_origins,
        allow_credentials=True,
    )
else:
    cors_kwargs.update(
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
    )

app.add_middleware(CORSMiddleware, **cors_kwargs)
log.info("CORS configured: %s", cors_kwargs)


# ---------------- Errors ----------------
# Every error body is {"error": "..."} (what the mobile client reads).
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"error": jsonable_errors(exc)})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]


# ---------------- Routers ----------------
for router in (user_router, alerts_router, incident_router, zones_router, safe_walks_router, emergency_router):
    app.include_router(router, prefix=_API_PREFIX)


# ---------------- Meta/utility ----------------
@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    # Visiting the root opens Swagger UI
    return RedirectResponse(url="/docs")


@app.get(f"{_API_PREFIX}/health", tags=["meta"])
def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


# ---------------- Local dev entrypoint ----------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "3001")),
        reload=True,
    )
