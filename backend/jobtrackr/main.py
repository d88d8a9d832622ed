import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from jobtrackr.core.config import settings, require_jwt_secret
from jobtrackr.routes.auth import router as auth_router
from jobtrackr.routes.job_applications import router as jobs_router
from jobtrackr.routes.notes import router as notes_router
from jobtrackr.routes.prep_folders import router as prep_folders_router
from jobtrackr.routes.prep_items import router as prep_items_router
from jobtrackr.routes.profile import router as profile_router
from jobtrackr.routes.stories import router as stories_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

require_jwt_secret()

app = FastAPI(title="JobTrackr")
logger.info("Startup config: ENV=%s CORS_ORIGINS=%s", settings.ENV, settings.CORS_ORIGINS)

_ERROR_CODE_BY_STATUS: dict[int, str] = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


def _error_code(status_code: int) -> str:
    return _ERROR_CODE_BY_STATUS.get(int(status_code), "HTTP_ERROR")


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException):  # noqa: ARG001
    detail = exc.detail
    message: str
    details: dict | None = None

    if isinstance(detail, str):
        message = detail
    elif isinstance(detail, dict):
        msg = detail.get("message")
        message = msg if isinstance(msg, str) and msg else "Request failed"
        det = detail.get("details")
        details = det if isinstance(det, dict) else None
    else:
        message = str(detail) if detail is not None else "Request failed"

    payload: dict = {"error": _error_code(exc.status_code), "message": message}
    if details:
        payload["details"] = details
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request payload",
            "details": {"errors": jsonable_errors(exc)},
        },
    )


@app.exception_handler(SQLAlchemyError)
def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    # Reads that fail outside commit_or_fail() end up here.
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": "Storage request failed"},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    out: list[dict] = []
    for err in exc.errors():
        out.append({k: v for k, v in err.items() if k in ("type", "loc", "msg")})
    return out


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(jobs_router)
app.include_router(stories_router)
app.include_router(notes_router)
app.include_router(prep_folders_router)
app.include_router(prep_items_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
