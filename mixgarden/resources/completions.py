"""同步补全接口（/chat/completions），不经过会话与任务轮询。"""

from typing import Any, Dict, Optional, Sequence

from mixgarden.domain.models import CompletionMessage
from mixgarden.transport.base import Transport


class CompletionsResource:
    def __init__(self, transport: Transport):
        self._transport = transport

    async def create(
        self,
        model: str,
        messages: Sequence[CompletionMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Any:
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if max_tokens is not None:
            payload["maxTokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature
        return await self._transport.execute("POST", "/chat/completions", body=payload)
