"""WheelTrust Reviews FastAPI application.

Serves the Reviews & Ratings domain over HTTP. Commands are processed
synchronously, so a created review's provider rating is already up to date
when the response is sent.

Submission locks are held per process. With several workers, a duplicate
review that races in from another worker is rejected by the database's
`uq_review_active_author` index at commit instead of being reported as a
duplicate, so run a single worker unless that is acceptable.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay of reviews/domain.toml is applied.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from reviews.domain import reviews  # noqa: E402

reviews.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="WheelTrust Reviews API",
    description="Service provider reviews and rating aggregates",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Reviews domain context for each API request."""
    if request.url.path.startswith("/service-providers"):
        with reviews.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from reviews.api.routes import provider_router  # noqa: E402

app.include_router(provider_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"reviews": {"name": reviews.name}},
        }
    )
