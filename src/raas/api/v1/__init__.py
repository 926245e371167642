from fastapi import APIRouter

from . import collaborators, core, plan, security

api_router = APIRouter()
for _router in (*core.routers, *plan.routers, *collaborators.routers, *security.routers):
    api_router.include_router(_router)

__all__ = ["api_router"]
