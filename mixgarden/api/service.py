"""同步服务模块。

为不运行事件循环的脚本提供简化的函数接口，内部用 asyncio.run 驱动 MixgardenClient。
已经在事件循环中的调用方应直接使用 MixgardenClient 的异步方法。
"""

import asyncio
from typing import Optional, Dict, Any

from mixgarden.client import MixgardenClient
from mixgarden.domain.models import PluginSettings
from mixgarden.infrastructure.logging.logger import logger


_client: Optional[MixgardenClient] = None


def get_default_client() -> MixgardenClient:
    """获取默认的 MixgardenClient 实例（单例）。"""
    global _client
    if _client is None:
        _client = MixgardenClient()
    return _client


def run_chat(
    content: str,
    model: str,
    conversation_id: Optional[str] = None,
    plugin_id: Optional[str] = None,
    plugin_settings: Optional[PluginSettings] = None,
    wait_for_response: Optional[bool] = None,
    poll_interval_ms: Optional[int] = None,
    timeout_ms: Optional[int] = None,
) -> Dict[str, Any]:
    """运行一轮对话。

    Args:
        content: 用户输入内容
        model: 模型 id
        conversation_id: 会话ID（可选，不提供则创建新会话）
        plugin_id: 插件 id（可选）
        plugin_settings: 插件配置（可选）
        wait_for_response: 是否等待生成结果（可选，默认取配置）
        poll_interval_ms: 轮询间隔（可选，默认取配置）
        timeout_ms: 等待上限（可选，默认取配置）

    Returns:
        包含 jobId、conversationId 以及（等待时）result 的字典

    Raises:
        各种 domain.exceptions 中定义的异常
    """
    try:
        client = get_default_client()
        response = asyncio.run(
            client.chat(
                content,
                model,
                conversation_id=conversation_id,
                plugin_id=plugin_id,
                plugin_settings=plugin_settings,
                wait_for_response=wait_for_response,
                poll_interval_ms=poll_interval_ms,
                timeout_ms=timeout_ms,
            )
        )
        return response.to_dict()
    except Exception as e:
        logger.error(f"Chat failed: {e}", extra={"extra": {
            "conversation_id": conversation_id,
            "error": str(e),
        }})
        raise


def list_models() -> list[Dict[str, Any]]:
    """列出可用模型。"""
    models = asyncio.run(get_default_client().get_models())
    return [{"id": m.id, "name": m.name} for m in models]


def list_plugins() -> list[Dict[str, Any]]:
    """列出全部插件（自动翻页）。"""
    plugins = asyncio.run(get_default_client().get_plugins())
    return [{"id": p.id, "name": p.name, "description": p.description} for p in plugins]


def list_conversations(limit: Optional[int] = None, offset: Optional[int] = None) -> list[Dict[str, Any]]:
    """列出会话。

    Returns:
        会话列表，每项包含 id, title, model
    """
    convs = asyncio.run(get_default_client().get_conversations(limit=limit, offset=offset))
    return [{"id": c.id, "title": c.title, "model": c.model} for c in convs]


def get_conversation(conversation_id: str) -> Dict[str, Any]:
    """获取单个会话的原始数据。"""
    conv = asyncio.run(get_default_client().get_conversation(conversation_id))
    return conv.raw
