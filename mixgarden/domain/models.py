"""SDK 共享的数据模型。

本模块定义编排层、轮询器与资源接口之间传递的标准结构：

- Message: 追加到会话中的一条消息（role 固定由编排层决定）。
- Conversation: 后端会话的只读视图。
- JobStatus / JobState: 生成任务状态。状态是封闭枚举加 UNKNOWN 兜底，
  后端新增的状态值会被当作非终态继续轮询，而不是导致解析失败。
- JobHandle / ChatResponse: 编排调用的返回值。

所有模型都保留 raw 字段，用于调试或访问 SDK 尚未建模的后端字段。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional


# 消息角色类型
Role = Literal["system", "user", "assistant"]

# 插件配置：键为字符串的开放映射，由后端负责校验
PluginSettings = Mapping[str, Any]


@dataclass
class Message:
    """一条会话消息。

    - role: 消息角色，如 user/assistant/system。
    - content: 纯文本内容。
    - plugin_id: 可选插件标识，如 "tone-pro"。
    - plugin_settings: 可选插件配置，原样透传给后端。
    """

    role: Role
    content: str
    plugin_id: Optional[str] = None
    plugin_settings: Optional[PluginSettings] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.plugin_id:
            payload["pluginId"] = self.plugin_id
        if self.plugin_settings is not None:
            payload["pluginSettings"] = dict(self.plugin_settings)
        return payload


@dataclass
class Conversation:
    id: str
    title: str = ""
    model: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Conversation":
        return cls(
            id=str(data.get("id") or ""),
            title=data.get("title") or "",
            model=data.get("model"),
            raw=dict(data),
        )


@dataclass
class Model:
    id: str
    name: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Model":
        return cls(id=str(data.get("id") or ""), name=data.get("name") or "", raw=dict(data))


@dataclass
class Plugin:
    id: str
    name: str = ""
    description: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Plugin":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            raw=dict(data),
        )


@dataclass
class CompletionMessage:
    """/chat/completions 请求中的一条消息。"""

    role: Role
    content: str


class JobStatus(str, Enum):
    """后端生成任务状态。"""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Any) -> "JobStatus":
        if isinstance(raw, str):
            value = raw.strip().lower()
            for status in cls:
                if status is not cls.UNKNOWN and status.value == value:
                    return status
        return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


@dataclass
class JobState:
    """一次状态查询的结果。

    - status: 解析后的状态；未知值为 JobStatus.UNKNOWN。
    - raw_status: 后端返回的原始状态字符串。
    - result: 仅在 completed 时存在的结果负载。
    - error: 仅在 failed 时存在的错误信息。
    """

    job_id: str
    status: JobStatus
    raw_status: Optional[str] = None
    result: Optional[Any] = None
    error: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, job_id: str, data: Mapping[str, Any]) -> "JobState":
        raw_status = data.get("status")
        error = data.get("error")
        if isinstance(error, Mapping):
            error = error.get("message") or str(dict(error))
        return cls(
            job_id=job_id,
            status=JobStatus.parse(raw_status),
            raw_status=raw_status if isinstance(raw_status, str) else None,
            result=data.get("result"),
            error=str(error) if error else None,
            raw=dict(data),
        )


@dataclass(frozen=True)
class JobHandle:
    """start_or_continue 的返回值：任务 id 与所属会话 id。"""

    job_id: str
    conversation_id: str


@dataclass
class ChatResponse:
    """一次完整编排调用的结果。

    wait_for_response 关闭时 result 为 None，调用方可凭 job_id 自行查询。
    """

    job_id: str
    conversation_id: str
    result: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"jobId": self.job_id, "conversationId": self.conversation_id}
        if self.result is not None:
            data["result"] = self.result
        return data


def unwrap_list(payload: Any) -> List[Dict[str, Any]]:
    """兼容 `[...]` 与 `{"data": [...]}` 两种列表响应。"""

    if isinstance(payload, Mapping):
        for key in ("data", "items", "results"):
            items = payload.get(key)
            if isinstance(items, list):
                payload = items
                break
        else:
            return []
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, Mapping)]
