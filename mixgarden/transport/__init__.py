"""HTTP 传输层。

- base: Transport 协议。
- http_transport: 基于 httpx.AsyncClient 的实现。
"""

from mixgarden.transport.base import Transport
from mixgarden.transport.http_transport import HttpTransport

__all__ = ["HttpTransport", "Transport"]
