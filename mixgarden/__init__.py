"""Mixgarden SDK 顶层包。

该包提供 Mixgarden AI/插件后端的 Python 客户端，
包括配置加载、HTTP 传输、资源接口、会话编排与生成任务轮询等能力。
"""

from mixgarden.client import MixgardenClient
from mixgarden.config.settings import MixgardenSettings
from mixgarden.domain.exceptions import (
    ConfigurationError,
    HttpError,
    JobFailedError,
    JobTimeoutError,
    MixgardenError,
    NetworkError,
    OrchestrationError,
    RateLimitError,
)
from mixgarden.domain.models import ChatResponse, JobHandle, JobStatus

__all__ = [
    "ChatResponse",
    "ConfigurationError",
    "HttpError",
    "JobFailedError",
    "JobHandle",
    "JobStatus",
    "JobTimeoutError",
    "MixgardenClient",
    "MixgardenError",
    "MixgardenSettings",
    "NetworkError",
    "OrchestrationError",
    "RateLimitError",
]
