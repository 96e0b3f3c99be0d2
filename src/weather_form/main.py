from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weather_form import __version__
from weather_form.api.router import router as weather_router
from weather_form.api.schemas import HealthResponse
from weather_form.config import get_app_settings

app = FastAPI(
    title="Weather Form API",
    description="Chat and location lookup backend for the weather query form",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_app_settings().client_base_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(weather_router, prefix="/api")


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", message="Weather AI Server is running")


def run() -> None:
    """Serve the API with uvicorn (``weather-form-api`` console script)."""
    import uvicorn

    uvicorn.run("weather_form.main:app", host="0.0.0.0", port=3000)
