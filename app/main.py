"""FastAPI application setup for SoarCast."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="SoarCast")


@app.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
