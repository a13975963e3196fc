"""FastAPI dependencies for route handlers.

Usage:
    from travel_service.core.dependencies import CallerDep

    @router.get("/settings")
    async def read_settings(caller: CallerDep):
        ...
"""

from travel_service.core.dependencies.auth import CallerDep, get_caller

__all__ = ["CallerDep", "get_caller"]
