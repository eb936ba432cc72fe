import logging

from flowsync.config import LOG_LEVEL

# 创建根记录器
logger = logging.getLogger("flowsync")

# 配置日志格式和级别，重复导入时不重复添加 handler
if not logger.handlers:
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(LOG_LEVEL)


# 模块日志记录器都挂在 flowsync 之下
def get_logger(name=None):
    if not name:
        return logger
    if name == "flowsync" or name.startswith("flowsync."):
        return logging.getLogger(name)
    return logging.getLogger(f"flowsync.{name}")
