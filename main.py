import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config.settings import settings
from infrastructure.db.sqlite import init_db
from infrastructure.web.controllers.user_controller import router as user_router
from infrastructure.web.controllers.statement_controller import router as statement_router


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="FinAPI")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def on_startup():
    init_db(settings.DB_PATH)

app.include_router(user_router)
app.include_router(statement_router)
