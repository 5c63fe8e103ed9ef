"""会话编排：确保会话存在 → 追加用户消息 → 启动生成任务。

三个请求严格串行、各只尝试一次，传输层异常原样向上抛出。
中途失败不做补偿：已创建的会话会留在服务端。
"""

from typing import Any, Mapping, Optional

from mixgarden.domain.exceptions import OrchestrationError
from mixgarden.domain.models import JobHandle, Message, PluginSettings
from mixgarden.infrastructure.logging.logger import logger
from mixgarden.resources.conversations import ConversationsResource


class ConversationOrchestrator:
    def __init__(self, conversations: ConversationsResource, default_title: str = "New Conversation"):
        self._conversations = conversations
        self._default_title = default_title

    async def start_or_continue(
        self,
        content: str,
        model: str,
        conversation_id: Optional[str] = None,
        plugin_id: Optional[str] = None,
        plugin_settings: Optional[PluginSettings] = None,
    ) -> JobHandle:
        """启动一轮生成，返回任务 id 与会话 id。

        Args:
            content: 用户消息内容
            model: 模型 id，例如 "mistral-small"
            conversation_id: 已有会话 id（可选，不提供则创建新会话）
            plugin_id: 插件 id（可选）
            plugin_settings: 插件配置（可选，原样透传）

        Raises:
            OrchestrationError: 后端响应缺少会话 id 或任务 id
        """
        if not conversation_id:
            conversation_id = await self._create_conversation(model)

        message = Message(
            role="user",
            content=content,
            plugin_id=plugin_id,
            plugin_settings=plugin_settings,
        )
        await self._conversations.add_message(conversation_id, message)
        logger.info("orchestrator.message_added", extra={"extra": {"conversation_id": conversation_id}})

        data = await self._conversations.start_generation(
            conversation_id,
            model=model,
            plugin_id=plugin_id,
            plugin_settings=plugin_settings,
        )
        job_id = _pick_id(data, "jobId", "job_id")
        if not job_id:
            logger.error(
                "orchestrator.missing_job_id",
                extra={"extra": {"conversation_id": conversation_id, "response": dict(data)}},
            )
            raise OrchestrationError(
                code="ORCHESTRATION_ERROR",
                message="no job id returned",
                http_status=502,
                conversation_id=conversation_id,
            )
        logger.info(
            "orchestrator.generation_started",
            extra={"extra": {"conversation_id": conversation_id, "job_id": job_id, "model": model}},
        )
        return JobHandle(job_id=job_id, conversation_id=conversation_id)

    async def _create_conversation(self, model: str) -> str:
        data = await self._conversations.create(title=self._default_title, model=model)
        conversation_id = _pick_id(data, "id")
        if not conversation_id:
            logger.error("orchestrator.missing_conversation_id", extra={"extra": {"response": dict(data)}})
            raise OrchestrationError(
                code="ORCHESTRATION_ERROR",
                message="conversation creation failed",
                http_status=502,
            )
        logger.info(
            "orchestrator.conversation_created",
            extra={"extra": {"conversation_id": conversation_id, "model": model}},
        )
        return conversation_id


def _pick_id(data: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return str(value)
    return None
