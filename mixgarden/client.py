"""MixgardenClient：SDK 的异步入口。

构造时一次性解析配置（api_key / base_url / 轮询默认值），
并组装 Transport、资源接口、会话编排器与任务轮询器。
客户端本身没有可变状态，可以在多个并发编排调用之间共享。
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from mixgarden.config.settings import MixgardenSettings, settings as default_settings
from mixgarden.domain.models import (
    ChatResponse,
    CompletionMessage,
    Conversation,
    JobHandle,
    Model,
    Plugin,
    PluginSettings,
)
from mixgarden.infrastructure.logging.logger import configure_logging, logger
from mixgarden.orchestration.orchestrator import ConversationOrchestrator
from mixgarden.orchestration.poller import JobPoller
from mixgarden.resources import CompletionsResource, ConversationsResource, ModelsResource, PluginsResource
from mixgarden.transport.base import Transport
from mixgarden.transport.http_transport import HttpTransport


class MixgardenClient:
    """Mixgarden API 客户端。

    Args:
        api_key: 显式 API 密钥；为空时使用配置/环境变量 MIXGARDEN_API_KEY
        base_url: 覆盖默认的 API 地址
        settings: 完整配置对象；为空时使用模块级默认配置
        transport: 自定义 Transport（例如测试桩）；为空时构造 HttpTransport。
            传入自定义 Transport 时不做凭证检查，认证由该 Transport 自行负责
        http_transport: 传给 httpx.AsyncClient 的底层 transport（例如 httpx.MockTransport）

    Raises:
        ConfigurationError: 未传入自定义 transport，且既没有显式 api_key，环境中也没有
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        settings: Optional[MixgardenSettings] = None,
        transport: Optional[Transport] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        cfg = settings or default_settings
        overrides: Dict[str, Any] = {}
        if api_key:
            overrides["api_key"] = api_key
        if base_url:
            overrides["base_url"] = base_url
        if overrides:
            # 重新校验，保证覆盖后的 base_url 同样被规范化
            cfg = MixgardenSettings.model_validate({**cfg.model_dump(), **overrides})
        self.settings = cfg
        configure_logging(cfg)

        self.transport: Transport = transport or HttpTransport(cfg, transport=http_transport)
        self.models = ModelsResource(self.transport)
        self.plugins = PluginsResource(self.transport, page_size=cfg.plugins_page_size)
        self.conversations = ConversationsResource(self.transport)
        self.completions = CompletionsResource(self.transport)
        self.orchestrator = ConversationOrchestrator(
            self.conversations,
            default_title=cfg.default_conversation_title,
        )
        self.poller = JobPoller(
            self.conversations,
            poll_interval_ms=cfg.poll_interval_ms,
            timeout_ms=cfg.timeout_ms,
        )

    # --- 高层接口 -----------------------------------------------------------

    async def chat(
        self,
        content: str,
        model: str,
        conversation_id: Optional[str] = None,
        plugin_id: Optional[str] = None,
        plugin_settings: Optional[PluginSettings] = None,
        *,
        wait_for_response: Optional[bool] = None,
        poll_interval_ms: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> ChatResponse:
        """发送一条用户消息并（默认）等待生成结果。

        wait_for_response 为 False 时只启动任务，返回的 ChatResponse.result 为 None；
        两种模式下会话创建、消息追加、任务启动的请求完全一致。
        """
        handle = await self.start_or_continue(
            content,
            model,
            conversation_id=conversation_id,
            plugin_id=plugin_id,
            plugin_settings=plugin_settings,
        )
        wait = self.settings.wait_for_response if wait_for_response is None else wait_for_response
        if not wait:
            return ChatResponse(job_id=handle.job_id, conversation_id=handle.conversation_id)

        result = await self.await_completion(
            handle.job_id,
            poll_interval_ms=poll_interval_ms,
            timeout_ms=timeout_ms,
        )
        return ChatResponse(job_id=handle.job_id, conversation_id=handle.conversation_id, result=result)

    async def start_or_continue(
        self,
        content: str,
        model: str,
        conversation_id: Optional[str] = None,
        plugin_id: Optional[str] = None,
        plugin_settings: Optional[PluginSettings] = None,
    ) -> JobHandle:
        return await self.orchestrator.start_or_continue(
            content,
            model,
            conversation_id=conversation_id,
            plugin_id=plugin_id,
            plugin_settings=plugin_settings,
        )

    async def await_completion(
        self,
        job_id: str,
        poll_interval_ms: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        return await self.poller.await_completion(
            job_id,
            poll_interval_ms=poll_interval_ms,
            timeout_ms=timeout_ms,
        )

    # --- 资源接口 -----------------------------------------------------------

    async def get_models(self) -> List[Model]:
        return await self.models.list()

    async def get_plugins(self) -> List[Plugin]:
        plugins = await self.plugins.list()
        logger.info("client.plugins_listed", extra={"extra": {"count": len(plugins)}})
        return plugins

    async def get_conversations(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Conversation]:
        return await self.conversations.list(limit=limit, offset=offset)

    async def get_conversation(self, conversation_id: str) -> Conversation:
        return await self.conversations.get(conversation_id)

    async def get_completion(
        self,
        model: str,
        messages: Sequence[CompletionMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Any:
        return await self.completions.create(model, messages, max_tokens=max_tokens, temperature=temperature)
