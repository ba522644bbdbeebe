"""
FastAPI entrypoint for the reimbursement backend application.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from reimbursement.core.config import settings
from reimbursement.api.router import api_router
from reimbursement.db.session import init_db
import reimbursement.models  # noqa: F401  (register tables)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    await init_db()
    yield


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Backend API for staff travel expense reimbursement",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": f"{settings.APP_NAME} API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
