from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from articles import router as articles_router
from auth import router as auth_router
from core import settings, store
from core.errors import register_error_handlers
from core.logging_config import setup_logging
from uploads import router as uploads_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    # One record store per process, rooted at DATA_DIR.
    store.init_store()
    try:
        yield
    finally:
        store.close_store()


app = FastAPI(lifespan=lifespan)

# Browser clients are served from elsewhere; origins come from CORS_ALLOWED_ORIGINS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router.router, tags=["auth"])
app.include_router(articles_router.router, tags=["articles"])
app.include_router(uploads_router.router, tags=["uploads"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
