import logging
import threading
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from cloudvault.logging_config import setup_logging
from cloudvault.database import Base, db
from cloudvault.errors import UpstreamError, register_error_handlers
from cloudvault.models import (
    blacklisted_token_model, file_model, folder_model, permission_model, share_link_model, user_model,
)
from cloudvault.routers import auth, folders, files, share, permissions, search, payment
from cloudvault.services.storage import get_object_store

setup_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=db)


def check_storage():
    try:
        get_object_store().ensure_bucket()
    except UpstreamError as e:
        logger.warning("Object storage not ready at startup: %s", e.message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Storage may come up after the API; requests report their own storage errors.
    app.state.storage_check = threading.Thread(target=check_storage, name="storage-check", daemon=True)
    app.state.storage_check.start()
    logger.info("CloudVault API started")
    yield


app = FastAPI(title="CloudVault", lifespan=lifespan)
register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(folders.router, prefix="/api", tags=["Folders"])
app.include_router(files.router, prefix="/api", tags=["Files"])
app.include_router(share.router, prefix="/api/share", tags=["Share"])
app.include_router(permissions.router, prefix="/api/permissions", tags=["Permissions"])
app.include_router(search.router, prefix="/api/search", tags=["Search"])
app.include_router(payment.router, prefix="/api/payment", tags=["Payment"])

@app.get("/")
def read_root():
    return "Server is running"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=5000)
