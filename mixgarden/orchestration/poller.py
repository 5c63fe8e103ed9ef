"""生成任务轮询器。

按固定间隔查询任务状态，直到 completed / failed 或超过截止时间。

- 第一次查询发生在截止判断之前，同步完成的后端即使 timeout 很小也能拿到结果。
- 两次查询之间用 asyncio.sleep 挂起，不阻塞事件循环上的其他编排调用。
- completed 但没有 result 时继续轮询（状态与结果字段可能分开写入），并记 warning。
- 超时只是客户端停止等待，后端任务不会被取消。
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

from mixgarden.domain.exceptions import JobFailedError, JobTimeoutError
from mixgarden.domain.models import JobState, JobStatus
from mixgarden.infrastructure.logging.logger import logger
from mixgarden.resources.conversations import ConversationsResource


DEFAULT_POLL_INTERVAL_MS = 1500
DEFAULT_TIMEOUT_MS = 30000


class JobPoller:
    def __init__(
        self,
        conversations: ConversationsResource,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._conversations = conversations
        self._poll_interval_ms = poll_interval_ms
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._sleep = sleep

    async def await_completion(
        self,
        job_id: str,
        poll_interval_ms: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        """等待任务结束并返回 result。

        Raises:
            JobFailedError: 后端报告 failed
            JobTimeoutError: 截止时间内没有终态
        """
        interval_ms = max(1, self._poll_interval_ms if poll_interval_ms is None else poll_interval_ms)
        deadline_ms = max(0, self._timeout_ms if timeout_ms is None else timeout_ms)

        start = self._clock()
        polls = 0
        while True:
            polls += 1
            state = await self._conversations.get_job_status(job_id)
            logger.debug(
                "poller.status",
                extra={"extra": {"job_id": job_id, "poll": polls, "status": state.raw_status}},
            )

            if state.status is JobStatus.COMPLETED:
                if state.result is not None:
                    logger.info("poller.completed", extra={"extra": {"job_id": job_id, "polls": polls}})
                    return state.result
                logger.warning("poller.completed_without_result", extra={"extra": {"job_id": job_id}})
            elif state.status is JobStatus.FAILED:
                self._raise_failed(state, polls)

            remaining = deadline_ms - self._elapsed_ms(start)
            if remaining <= 0:
                break
            await self._sleep(min(interval_ms, remaining) / 1000.0)
            if self._elapsed_ms(start) >= deadline_ms:
                break

        logger.error(
            "poller.timeout",
            extra={"extra": {"job_id": job_id, "polls": polls, "timeout_ms": deadline_ms}},
        )
        raise JobTimeoutError(job_id=job_id, timeout_ms=deadline_ms, polls=polls)

    def _elapsed_ms(self, start: float) -> float:
        return (self._clock() - start) * 1000.0

    @staticmethod
    def _raise_failed(state: JobState, polls: int) -> None:
        message = state.error or "job failed"
        logger.error(
            "poller.failed",
            extra={"extra": {"job_id": state.job_id, "polls": polls, "error": message}},
        )
        raise JobFailedError(message, job_id=state.job_id)
