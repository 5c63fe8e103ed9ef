"""会话编排与任务轮询。"""

from mixgarden.orchestration.orchestrator import ConversationOrchestrator
from mixgarden.orchestration.poller import DEFAULT_POLL_INTERVAL_MS, DEFAULT_TIMEOUT_MS, JobPoller

__all__ = ["ConversationOrchestrator", "DEFAULT_POLL_INTERVAL_MS", "DEFAULT_TIMEOUT_MS", "JobPoller"]
