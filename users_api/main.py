from fastapi import FastAPI

from users_api.api.routes import health_router
from users_api.api.routes import router as user_router
from users_api.core.config import settings
from users_api.core.logging_config import setup_logging
from users_api.repositories.store import get_store, select_store_config

app = FastAPI(title="users-api")
app.include_router(user_router)
app.include_router(health_router)


# The store is chosen once from configuration, never from a request's Host header.
@app.on_event("startup")
async def startup_event():
    setup_logging(settings.log_level)
    config = select_store_config(settings.host, settings)
    app.state.store = get_store(config)


@app.on_event("shutdown")
async def shutdown_event():
    store = getattr(app.state, "store", None)
    if store:
        await store.close()
