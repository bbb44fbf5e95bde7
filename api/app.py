import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import moon_times as moon_times_router
from .middleware.logging import LoggingMiddleware
from .services import ephem
from .services.ephem import EphemerisError
from .services.orchestrators.moon_month import MoonTimesRequestError


logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000

ephem.init_paths(os.getenv("SE_EPHE_PATH"))

app = FastAPI(title="moon-times", version="1.0.0")

# Configure CORS - localhost for development, explicit origins otherwise
app_env = os.getenv("APP_ENV")
is_dev = app_env is None or app_env.lower() in {"dev", "development"}

if is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=86400,
    )
else:
    allowed = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=86400,
    )

app.add_middleware(LoggingMiddleware)

app.include_router(moon_times_router.router)


@app.exception_handler(MoonTimesRequestError)
async def _request_error(_request: Request, exc: MoonTimesRequestError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(EphemerisError)
async def _ephemeris_error(request: Request, exc: EphemerisError) -> JSONResponse:
    logger.error("moon_times_ephemeris_failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/__health")
def health():
    return {"ok": True, "engine": ephem.ENGINE_VERSION}


@app.get("/")
def root():
    return {"message": "moon-times API is running. See /api/moon-times and /docs."}


def main() -> None:
    import uvicorn

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    host = os.getenv("HOST", "0.0.0.0")
    logger.info("Server running at http://localhost:%s", port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
