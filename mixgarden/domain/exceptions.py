"""统一业务异常模型。

SDK 对外抛出的所有错误都继承自 MixgardenError，
便于调用方按类型区分：配置错误、传输错误、编排错误、任务失败与等待超时。
"""

from typing import Any, Optional


class MixgardenError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 job_id、conversation_id 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ConfigurationError(MixgardenError):
    """缺少凭证等配置问题，在客户端构造时抛出，不做重试。"""


class NetworkError(MixgardenError):
    """网络层错误，例如 DNS 失败、连接失败、超时等。"""


class HttpError(MixgardenError):
    """后端返回非 2xx 状态码，或 2xx 响应体无法解析为 JSON。"""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        raw_body: Optional[str] = None,
        **extra: Any,
    ):
        super().__init__(code=code, message=message, http_status=status_code, **extra)
        self.status_code = status_code
        self.raw_body = raw_body


class RateLimitError(HttpError):
    """HTTP 429，由上层负责重试/退避策略。"""


class OrchestrationError(MixgardenError):
    """会话/生成编排过程中后端返回了缺字段的响应。"""


class JobFailedError(MixgardenError):
    """后端报告生成任务以 failed 结束。"""

    def __init__(self, message: str, job_id: Optional[str] = None, **extra: Any):
        super().__init__(code="JOB_FAILED", message=message, http_status=502, job_id=job_id, **extra)
        self.job_id = job_id


class JobTimeoutError(MixgardenError, TimeoutError):
    """在截止时间内未观察到终态。

    注意：客户端停止轮询并不会取消后端任务，任务可能仍在服务端运行。
    """

    def __init__(self, job_id: str, timeout_ms: int, **extra: Any):
        super().__init__(
            code="JOB_TIMEOUT",
            message=f"job {job_id} did not finish within {timeout_ms} ms",
            http_status=504,
            job_id=job_id,
            timeout_ms=timeout_ms,
            **extra,
        )
        self.job_id = job_id
        self.timeout_ms = timeout_ms
