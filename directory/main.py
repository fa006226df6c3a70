from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError
from directory.db import Base, engine
from directory.api.routes import router as api_router
from directory.utils import logger
import directory.models  # noqa: F401 ensure models are imported so tables are known

# create FastAPI instance
app = FastAPI(title="Local business directory")
app.include_router(api_router)


@app.on_event("startup")
def on_startup_create_tables():
    # Ensure database tables are created on startup
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        # the store may be unreachable at boot; requests will report it as 500
        logger.error("Could not create tables on startup: %s", e)
