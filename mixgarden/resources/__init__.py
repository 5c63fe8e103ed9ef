"""REST 资源接口。

该包下的模块负责：
- conversations: 会话、消息、生成任务与任务状态。
- catalog: 模型与插件目录（插件分页累积）。
- completions: 不经过任务轮询的 /chat/completions。
"""

from mixgarden.resources.catalog import ModelsResource, PluginsResource
from mixgarden.resources.completions import CompletionsResource
from mixgarden.resources.conversations import ConversationsResource

__all__ = ["CompletionsResource", "ConversationsResource", "ModelsResource", "PluginsResource"]
