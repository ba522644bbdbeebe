"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from reimbursement.api.routes import trips, expenses, reports, toll_booths

api_router = APIRouter()

# Include all route modules
api_router.include_router(trips.router)
api_router.include_router(expenses.router)
api_router.include_router(reports.router)
api_router.include_router(toll_booths.router)
