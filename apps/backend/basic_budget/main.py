from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.database import init_db
from .core.errors import BackendError
from .core.logging import setup_logging
from .routers import router

ERROR_STATUS = {
    "validation": 422,
    "not_found": 404,
    "conflict": 409,
    "persistence": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    init_db()
    yield


app = FastAPI(title="Basic Budget Backend", version="0.1.0", lifespan=lifespan)

# CORS (프론트엔드 연결 준비)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 500),
        content={"detail": exc.message, "code": exc.code},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router, prefix="/api")
