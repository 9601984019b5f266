"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from teamtasks.config import settings
from teamtasks.database import Base, engine
import teamtasks.models  # noqa: F401 - 모델 import로 metadata 등록
from teamtasks.routers import auth, members, tasks

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
app = FastAPI(
    title="Team Tasks",
    description="팀 태스크 배정/완료 관리 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(auth.router)
app.include_router(members.router)
app.include_router(tasks.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Team Tasks"}
