import json
from pathlib import Path
from typing import Any, Union

from flowsync.utils.errors import FilesystemError
from flowsync.utils.logger import get_logger

logger = get_logger(__name__)


# 读取持久化文件的原始内容，不做解析
def read_process_file(path: Union[str, Path]) -> bytes:
    path = Path(path)
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise
    except OSError as e:
        logger.error(f"Error reading {path}: {e}")
        raise FilesystemError(f"Error reading {path}: {e}") from e


# 整体覆盖持久化文件，两空格缩进
def write_process_file(path: Union[str, Path], data: Any) -> None:
    path = Path(path)
    try:
        content = json.dumps(data, indent=2, ensure_ascii=False)
        path.write_text(content, encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Error writing {path}: {e}")
        raise FilesystemError(f"Error writing {path}: {e}") from e
    logger.info(f"Wrote {len(content)} bytes to {path}")
