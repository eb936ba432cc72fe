from typing import Optional


class FlowSyncError(Exception):
    pass


# 读取远端文档失败（网络错误或非 2xx 状态）
class FetchError(FlowSyncError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# 响应体不是合法的 JSON 对象
class ParseError(FetchError):
    pass


# 保存失败（网络错误或非 2xx 状态）
class SaveError(FlowSyncError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# 服务端读写文件失败，对外只表现为 HTTP 500
class FilesystemError(FlowSyncError):
    pass
