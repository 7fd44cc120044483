"""FastAPI application setup for the irrigation weather service."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Irrigation Weather")


@app.get("/healthz")
def healthz():
    """Liveness probe."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
