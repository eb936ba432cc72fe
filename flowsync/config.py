import os

from dotenv import load_dotenv

# 加载环境变量
load_dotenv()

# 持久化文件配置
PROCESS_FILE = os.getenv("FLOWSYNC_PROCESS_FILE", "public/process.json")

# 服务端配置
SERVER_HOST = os.getenv("FLOWSYNC_SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("FLOWSYNC_SERVER_PORT", 3000))

# 客户端配置
CLIENT_BASE_URL = os.getenv("FLOWSYNC_CLIENT_BASE_URL", f"http://{SERVER_HOST}:{SERVER_PORT}")
PROCESS_ENDPOINT = os.getenv("FLOWSYNC_PROCESS_ENDPOINT", "/process.json")

# 未设置时不限制请求时间
_http_timeout = os.getenv("FLOWSYNC_HTTP_TIMEOUT")
HTTP_TIMEOUT = float(_http_timeout) if _http_timeout else None

# 新节点的默认放置区域
VIEWPORT_WIDTH = float(os.getenv("FLOWSYNC_VIEWPORT_WIDTH", 1280))
VIEWPORT_HEIGHT = float(os.getenv("FLOWSYNC_VIEWPORT_HEIGHT", 800))

# 日志级别，生产环境建议使用 INFO
LOG_LEVEL = os.getenv("FLOWSYNC_LOG_LEVEL", "DEBUG").upper()

# 应用配置
APP_TITLE = "FlowSync API"
APP_DESCRIPTION = "流程图节点/连线存储服务"
APP_VERSION = "1.0.0"
APP_DOCS_URL = "/swagger"
APP_REDOC_URL = "/redoc"
