import uvicorn
from fastapi import FastAPI
from flowsync.utils.logger import get_logger

# 导入配置
from flowsync.config import (
    APP_DESCRIPTION,
    APP_DOCS_URL,
    APP_REDOC_URL,
    APP_TITLE,
    APP_VERSION,
    SERVER_HOST,
    SERVER_PORT,
)

# 导入路由模块
from flowsync.routers import process

# 导入日志模块
logger = get_logger(__name__)

# 创建FastAPI应用实例，指定Swagger UI路径和Redoc路径
app = FastAPI(
    title=APP_TITLE,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    docs_url=APP_DOCS_URL,
    redoc_url=APP_REDOC_URL,
    openapi_url="/openapi.json"
)


# 注册路由
app.include_router(process.router)

# 添加中间件来记录请求和响应
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status code: {response.status_code}")
    return response


if __name__ == "__main__":
    logger.info(f"Server listening on port {SERVER_PORT}")
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
