"""
HTTP boundary: FastAPI routers and dependencies.

The versioned router is mounted by ``app.main.create_app``:

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)
"""
