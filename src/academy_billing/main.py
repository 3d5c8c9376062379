'''
FastAPI application exposing the billing engine.
'''
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .common.logger import log
from .common.config import settings
from .api import billing

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    log.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")
    if settings.TEST_MODE:
        log.info("Running in TEST_MODE.")

    yield # --- Application is now running ---

    log.info("Application lifespan shutdown...")


# ---- CREATING THE APP ----
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# --- Add CORS Middleware ---
origins = [
    "http://localhost",
    "http://localhost:3000",
]
origins.extend(settings.BACKEND_CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],)
# --- End of CORS Middleware ---

@app.get("/")
async def health_check():
    return {"status": "ok", "message": f"{settings.APP_NAME} is running"}

app.include_router(billing.router)
