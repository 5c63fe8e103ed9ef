"""SDK 日志。

导入时只获取名为 "mixgarden" 的 logger，不创建目录或文件。
MixgardenClient 构造时调用 configure_logging(cfg)，按该客户端配置中的 log_dir 与
log_redact_content 挂载 JSON 行格式的文件 handler；文件在第一条日志写入时才创建。

logger 是进程级的：多个客户端使用不同 log_dir 时，以最后构造的客户端为准。
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from mixgarden.config.settings import MixgardenSettings


LOG_FILE_NAME = "mixgarden.log"

logger = logging.getLogger("mixgarden")
logger.setLevel(logging.INFO)


class JsonFormatter(logging.Formatter):
    """单行 JSON 格式；record.extra 中的字段平铺到顶层。"""

    def __init__(self, redact_content: bool = False):
        super().__init__()
        self.redact_content = redact_content

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if self.redact_content:
            msg = (msg or "")[:64]
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, ensure_ascii=False, default=str)


class SdkFileHandler(logging.FileHandler):
    """延迟打开的文件 handler，首次写入时才创建日志目录。"""

    def __init__(self, path: str):
        super().__init__(path, encoding="utf-8", delay=True)

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


def configure_logging(cfg: MixgardenSettings) -> logging.Handler:
    """按配置挂载（或复用）SDK 文件 handler，并返回它。"""

    path = os.path.abspath(os.path.join(cfg.log_dir, LOG_FILE_NAME))
    formatter = JsonFormatter(redact_content=cfg.log_redact_content)
    for handler in list(logger.handlers):
        if not isinstance(handler, SdkFileHandler):
            continue
        if handler.baseFilename == path:
            handler.setFormatter(formatter)
            return handler
        logger.removeHandler(handler)
        handler.close()

    handler = SdkFileHandler(path)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return handler
