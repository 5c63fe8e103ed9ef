"""基于 httpx 的异步 Transport 实现。

- URL: {base_url}{path}
- 认证: Authorization: Bearer <api_key>

每次请求创建独立的 httpx.AsyncClient，实例上除静态配置外没有可变状态，
因此同一个 HttpTransport 可以被多个并发的编排调用共享。
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from mixgarden.config.settings import MixgardenSettings, settings
from mixgarden.domain.exceptions import ConfigurationError, HttpError, NetworkError, RateLimitError
from mixgarden.infrastructure.logging.logger import logger


class HttpTransport:
    """Mixgarden REST API 的 HTTP 客户端。"""

    name = "mixgarden"

    def __init__(
        self,
        cfg: MixgardenSettings = settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not getattr(cfg, "api_key", None):
            raise ConfigurationError(
                code="MISSING_API_KEY",
                message="Mixgarden API key is required (set MIXGARDEN_API_KEY env or pass api_key)",
            )
        self._settings = cfg
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    async def execute(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        params = {k: v for k, v in (query or {}).items() if v is not None}
        try:
            async with httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.http_timeout,
                transport=self._transport,
                trust_env=False,
            ) as client:
                resp = await client.request(
                    method.upper(),
                    path,
                    json=body,
                    params=params or None,
                    headers=self._headers(),
                )
        except httpx.RequestError as e:
            logger.error(
                "transport.network_error",
                extra={"extra": {"method": method.upper(), "path": path, "error": str(e)}},
            )
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__, http_status=503)
        if resp.status_code == 429:
            raise RateLimitError(
                code="RATE_LIMIT",
                message="Mixgarden rate limit",
                status_code=429,
                raw_body=resp.text,
            )
        if not 200 <= resp.status_code < 300:
            logger.error(
                "transport.http_error",
                extra={"extra": {"method": method.upper(), "path": path, "status": resp.status_code}},
            )
            raise HttpError(
                code="HTTP_ERROR",
                message=f"{method.upper()} {path} failed with status {resp.status_code}",
                status_code=resp.status_code,
                raw_body=resp.text,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            # JSONDecodeError 与 UnicodeDecodeError 都是 ValueError
            raise HttpError(
                code="INVALID_JSON",
                message=f"{method.upper()} {path} returned a non-JSON body",
                status_code=resp.status_code,
                raw_body=resp.text,
            )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
