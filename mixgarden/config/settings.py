"""配置管理模块。

支持从初始化参数、环境变量（前缀 MIXGARDEN_）、.env 以及 YAML 配置文件加载配置。
所有默认值（默认 base_url、轮询间隔、超时等）都集中在 MixgardenSettings 中，
客户端构造时一次性解析，不在运行期做隐式的全局查找。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://api.mixgarden.ai/api/v1"


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 mixgarden.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("MIXGARDEN_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "mixgarden.yaml",
        Path.cwd() / "mixgarden.yml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class MixgardenSettings(BaseSettings):
    """Mixgarden SDK 配置。"""

    # ---- 认证与地址 ----
    api_key: Optional[str] = Field(default=None, description="Mixgarden API 密钥")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Mixgarden API 基础URL")
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")

    # ---- 生成任务轮询 ----
    poll_interval_ms: int = Field(default=1500, ge=1, description="两次状态查询之间的间隔（毫秒）")
    timeout_ms: int = Field(default=30000, ge=0, description="等待任务完成的总时长（毫秒）")
    wait_for_response: bool = Field(
        default=True,
        description="为 False 时只启动生成任务并直接返回 jobId，不做轮询",
    )

    # ---- 资源接口 ----
    default_conversation_title: str = Field(
        default="New Conversation",
        description="自动创建会话时使用的标题",
    )
    plugins_page_size: int = Field(default=50, ge=1, le=200, description="插件列表分页大小")

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_prefix="MIXGARDEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("api_key")
    @classmethod
    def normalize_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = MixgardenSettings()

# 类型别名，让外部代码可以使用 Settings 类型
Settings = MixgardenSettings
