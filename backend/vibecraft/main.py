import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vibecraft.config import settings
from vibecraft.db import init_db
from vibecraft.routers import agents, events
from vibecraft.services.hub import create_hub


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    await init_db()
    app.state.hub = create_hub()
    yield
    # Shutdown


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(agents.router)
app.include_router(events.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.APP_NAME}
