"""Komeza Wige - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import ServerSelectionTimeoutError

from app.config import settings
from app.db import db_shutdown, db_startup
from app.seed import seed_admin
from app.services.roles import ensure_default_roles
from app.api import (
    alerts,
    attendance,
    auth,
    dashboard,
    interventions,
    organization,
    reports,
    roles,
    students,
    users,
)
from app.api.deps import require_module_permission

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await db_startup()
        await ensure_default_roles()
        await seed_admin()
    except ServerSelectionTimeoutError as e:
        logger.error("MongoDB is not reachable at %s", settings.mongodb_url)
        raise RuntimeError("MongoDB connection failed. Start MongoDB and check MONGODB_URL.") from e
    logger.info("%s started", settings.app_name)
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="School attendance tracking with dropout-risk alerts and district reporting",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=[Depends(require_module_permission("dashboard"))])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"], dependencies=[Depends(require_module_permission("attendance"))])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"], dependencies=[Depends(require_module_permission("reports"))])
app.include_router(students.router, prefix="/api/students", tags=["Students"], dependencies=[Depends(require_module_permission("students"))])
app.include_router(alerts.router, prefix="/api/alerts", tags=["At-Risk Alerts"], dependencies=[Depends(require_module_permission("alerts"))])
app.include_router(interventions.router, prefix="/api/interventions", tags=["Interventions"], dependencies=[Depends(require_module_permission("interventions"))])
app.include_router(organization.router, prefix="/api", tags=["Districts, Schools & Classes"], dependencies=[Depends(require_module_permission("organization"))])
app.include_router(users.router, prefix="/api/users", tags=["Users"], dependencies=[Depends(require_module_permission("users"))])
app.include_router(roles.router, prefix="/api/roles", tags=["Roles & Permissions"], dependencies=[Depends(require_module_permission("roles_permissions"))])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
