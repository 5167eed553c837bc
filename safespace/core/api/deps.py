"""
FastAPI dependencies shared by the routers.
"""
from fastapi import Request

from safespace.core.memory.storage import Storage


def get_storage(request: Request) -> Storage:
    """
    Dependency returning the application's record store.

    Usage:
        @router.get("/endpoint")
        async def endpoint(storage: Storage = Depends(get_storage)):
            ...
    """
    return request.app.state.storage
