"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from shiftlog.api.endpoints import analytics, attendance, auth, employees, health

api_router = APIRouter()

# Public
api_router.include_router(health.router)
api_router.include_router(auth.router)

# Bearer token required
api_router.include_router(employees.router)
api_router.include_router(analytics.router)
api_router.include_router(attendance.router)
