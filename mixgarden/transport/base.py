"""Transport 抽象接口。

资源接口与编排层不直接依赖 httpx，而是依赖此协议：

- execute(method, path, body, query): 发起一次带认证的请求，返回解析后的 JSON。
- 非 2xx 抛 HttpError，连接层失败抛 NetworkError。

这样测试可以用桩对象替换整个传输层，编排逻辑保持不变。
"""

from typing import Any, Mapping, Optional, Protocol


class Transport(Protocol):
    """HTTP/JSON 传输协议。"""

    async def execute(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        ...
