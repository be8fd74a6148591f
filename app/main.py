# /app/main.py
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Core / Config ---
from app.core.config import settings
from app.db.base import Base
from app.db.session import engine

# --- API Routers ---
from app.api.routes import auth as auth_router
from app.api.routes import school_auth as school_auth_router
from app.api.routes import profile as profile_router
from app.api.routes import posts as posts_router
from app.api.routes import likes as likes_router
from app.api.routes import comments as comments_router
from app.api.routes import teachers as teachers_router
from app.api.routes import reviews as reviews_router
from app.api.routes import connections as connections_router
from app.api.routes import messages as messages_router
from app.api.routes import discussions as discussions_router
from app.api.routes import schools as schools_router
from app.api.routes import upload as upload_router


logging.basicConfig(
    level=logging.INFO, # INFO 레벨 이상의 로그를 모두 출력하도록 설정
    format="%(asctime)s - %(levelname)s - %(message)s", # 로그 형식 지정
    force=True # 다른 라이브러리에 의해 이미 설정되었더라도 강제로 재설정
)

logger = logging.getLogger(__name__)


# --- Lifespan (애플리케이션 시작/종료 이벤트) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # 테이블이 없으면 생성 (기존 테이블은 건드리지 않음)
    Base.metadata.create_all(bind=engine)
    logger.info("Database connected successfully")

    yield

# --- FastAPI App Instance ---
app = FastAPI(
    title="Teecha API",
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()

    # 다음 미들웨어나 실제 API 엔드포인트를 호출
    response = await call_next(request)

    process_time = time.time() - start_time

    # 응답 헤더에 처리 시간 추가
    response.headers["X-Process-Time"] = str(process_time)

    # 로그에 API 경로와 처리 시간 기록
    logging.info(
        f"Request processed: {request.method} {request.url.path} - Completed in {process_time:.4f} secs"
    )

    return response


# --- 예외 처리 ---
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 요청 검증 실패는 422 대신 400 + 필드별 메시지
    errors = [
        {"field": str(err["loc"][-1]) if err.get("loc") else None, "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Server error"})


# --- CORS 미들웨어 설정 ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# --- 라우트 등록 ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(school_auth_router.router, prefix="/api/school-auth", tags=["Authentication"])
app.include_router(profile_router.router, prefix="/api/profile", tags=["profile"])
app.include_router(posts_router.router, prefix="/api/posts", tags=["posts"])
app.include_router(likes_router.router, prefix="/api/likes", tags=["likes"])
app.include_router(comments_router.router, prefix="/api/comments", tags=["comments"])
app.include_router(teachers_router.router, prefix="/api/teachers", tags=["teachers"])
app.include_router(reviews_router.router, prefix="/api/reviews", tags=["reviews"])
app.include_router(connections_router.router, prefix="/api/connections", tags=["connections"])
app.include_router(messages_router.router, prefix="/api/messages", tags=["messages"])
app.include_router(discussions_router.router, prefix="/api/discussions", tags=["discussions"])
app.include_router(schools_router.router, prefix="/api/schools", tags=["schools"])
app.include_router(upload_router.router, prefix="/api/upload", tags=["upload"])


@app.get("/", tags=["health"])
def root():
    return {"message": "Teecha API is running"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
