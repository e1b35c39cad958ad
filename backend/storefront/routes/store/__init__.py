"""
/store API.

Registration order:
    1. auth routes (login, logout, email check)
    2. optional customer authentication for everything below
    3. resource routes (customers, regions)
"""

from fastapi import APIRouter, Depends

from storefront.routes.deps import authenticate_customer
from storefront.routes.store import auth, customers, regions

router = APIRouter(prefix="/store")

router.include_router(auth.router)

resources = APIRouter(dependencies=[Depends(authenticate_customer)])
resources.include_router(customers.router)
resources.include_router(regions.router)

router.include_router(resources)
