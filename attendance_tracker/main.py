import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from attendance_tracker.core.config import settings
from attendance_tracker.core.exceptions import AttendanceRuleError
from attendance_tracker.api.endpoints import (
    auth,
    profile,
    users,
    attendance,
    leave_applications,
    holidays,
    analytics,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Attendance Tracker",
    description="API for marking attendance, applying for leave and managing local holidays",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AttendanceRuleError)
async def handle_rule_error(request: Request, exc: AttendanceRuleError):
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# Include routers
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(users.router)
app.include_router(attendance.router)
app.include_router(leave_applications.router)
app.include_router(holidays.router)
app.include_router(holidays.lookup_router)  # Holiday lookup for all users
app.include_router(analytics.router)


@app.get("/")
def root():
    return {
        "message": "Attendance Tracker API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
