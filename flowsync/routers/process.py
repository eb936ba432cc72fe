from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from flowsync.config import PROCESS_FILE
from flowsync.services.process_file import read_process_file, write_process_file
from flowsync.utils.errors import FilesystemError
from flowsync.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["流程文档"])


# 持久化文件路径，测试中可通过 dependency_overrides 替换
def get_process_file() -> str:
    return PROCESS_FILE


# 返回持久化文件的原始内容
@router.get("/process.json")
async def get_process(path: str = Depends(get_process_file)):
    try:
        content = read_process_file(path)
    except FileNotFoundError:
        logger.error(f"Process file not found: {path}")
        return PlainTextResponse("Process file not found", status_code=404)
    except FilesystemError:
        return PlainTextResponse("Error reading file", status_code=500)
    return Response(content=content, media_type="application/json")


# 用请求体整体覆盖持久化文件，不做结构校验
@router.post("/process.json", response_class=PlainTextResponse)
async def save_process(request: Request, path: str = Depends(get_process_file)):
    logger.info("Received POST request to /process.json")
    try:
        data = await request.json()
    except ValueError as e:
        logger.error(f"Failed to parse JSON payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid JSON payload")
    logger.debug(f"Data: {data}")

    try:
        write_process_file(path, data)
    except FilesystemError:
        return PlainTextResponse("Error writing to file", status_code=500)
    return "Data successfully written to file"
