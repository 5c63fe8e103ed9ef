"""会话相关接口：创建/查询会话、追加消息、启动生成任务、查询任务状态。

这些方法都是单次请求的薄封装，字段校验（例如响应是否带 id）交给编排层。
"""

from typing import Any, Dict, List, Mapping, Optional

from mixgarden.domain.models import Conversation, JobState, Message, PluginSettings, unwrap_list
from mixgarden.transport.base import Transport


class ConversationsResource:
    def __init__(self, transport: Transport):
        self._transport = transport

    async def create(self, title: str, model: str) -> Mapping[str, Any]:
        data = await self._transport.execute("POST", "/conversations", body={"title": title, "model": model})
        return data if isinstance(data, Mapping) else {}

    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Conversation]:
        data = await self._transport.execute(
            "GET",
            "/conversations",
            query={"limit": limit, "offset": offset},
        )
        return [Conversation.from_payload(item) for item in unwrap_list(data)]

    async def get(self, conversation_id: str) -> Conversation:
        data = await self._transport.execute("GET", f"/conversations/{conversation_id}")
        return Conversation.from_payload(data if isinstance(data, Mapping) else {})

    async def add_message(self, conversation_id: str, message: Message) -> Mapping[str, Any]:
        data = await self._transport.execute(
            "POST",
            f"/conversations/{conversation_id}/messages",
            body=message.to_payload(),
        )
        return data if isinstance(data, Mapping) else {}

    async def start_generation(
        self,
        conversation_id: str,
        model: str,
        plugin_id: Optional[str] = None,
        plugin_settings: Optional[PluginSettings] = None,
    ) -> Mapping[str, Any]:
        body: Dict[str, Any] = {"model": model}
        if plugin_id:
            body["pluginId"] = plugin_id
        if plugin_settings is not None:
            body["pluginSettings"] = dict(plugin_settings)
        data = await self._transport.execute(
            "POST",
            f"/conversations/{conversation_id}/generate",
            body=body,
        )
        return data if isinstance(data, Mapping) else {}

    async def get_job_status(self, job_id: str) -> JobState:
        data = await self._transport.execute("GET", f"/conversations/generate/status/{job_id}")
        return JobState.from_payload(job_id, data if isinstance(data, Mapping) else {})
