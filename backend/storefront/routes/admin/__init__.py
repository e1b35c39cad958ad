"""
/admin API.

`router` mounts the public routes first (login, password reset) and then
every resource router behind `require_admin_user`.
"""

from fastapi import APIRouter, Depends

from storefront.routes.admin import (
    auth,
    currencies,
    exports,
    regions,
    stock_locations,
    store,
    uploads,
    users,
)
from storefront.routes.deps import require_admin_user

router = APIRouter(prefix="/admin")

router.include_router(auth.router)
router.include_router(users.public_router)

protected = APIRouter(dependencies=[Depends(require_admin_user)])
protected.include_router(regions.router)
protected.include_router(store.router)
protected.include_router(currencies.router)
protected.include_router(users.router)
protected.include_router(stock_locations.router)
protected.include_router(uploads.router)
protected.include_router(exports.router)

router.include_router(protected)
