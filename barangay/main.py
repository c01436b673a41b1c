# FastAPI application entry point: builds the document store and services,
# registers the API routes and maps service errors to JSON responses.

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from barangay.core.config import Settings, settings
from barangay.core.errors import BarangayError
from barangay.db import DocumentStore
from barangay.routes.admin import router as admin_router
from barangay.routes.auth import router as auth_router
from barangay.routes.records import router as records_router
from barangay.services.approvals import ApprovalStateMachine
from barangay.services.auth_service import AuthService
from barangay.services.credential_store import CredentialStore
from barangay.services.limiter import RateLimiter
from barangay.services.passwords import PasswordHasher
from barangay.services.records import (
    AnnouncementService,
    ComplaintService,
    EmergencyContactService,
    ResidentService,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = app.state.settings
    app.state.db.open()

    if config.SEED_DEFAULT_ADMIN:
        app.state.auth_service.seed_default_admin(config.DEFAULT_ADMIN_IDENTITY, config.DEFAULT_ADMIN_SECRET)

    yield

    app.state.db.close()


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(BarangayError)
    async def barangay_error_handler(request: Request, exc: BarangayError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Missing or malformed fields are client errors, not 422s
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        logger.warning(f"{request.method} {request.url.path} -> 400 invalid fields {fields}")
        return JSONResponse(
            status_code=400,
            content={"message": f"Invalid request body: {', '.join(fields)}", "code": "VALIDATION_ERROR"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail), "code": "HTTP_ERROR"},
            headers=getattr(exc, "headers", None),
        )


def create_app(config: Settings | None = None, db: DocumentStore | None = None) -> FastAPI:
    config = config or settings
    db = db or DocumentStore(config.DATA_FILE)

    store = CredentialStore(db)
    auth_service = AuthService(
        store=store,
        hasher=PasswordHasher(rounds=config.BCRYPT_ROUNDS),
        approvals=ApprovalStateMachine(store),
    )

    app = FastAPI(title=config.APP_NAME, lifespan=lifespan)
    app.state.settings = config
    app.state.db = db
    app.state.auth_service = auth_service
    app.state.limiter = RateLimiter(config)
    app.state.records = {
        "residents": ResidentService(db),
        "emergency_contacts": EmergencyContactService(db),
        "complaints": ComplaintService(db),
        "announcements": AnnouncementService(db),
    }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)
    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(records_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
