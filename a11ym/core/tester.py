"""
结果聚合器 - 并发运行两个检查器并合并结果

每个 URL 对应一个独立的聚合过程（AggregationEpisode）：
1. 同时调度可访问性检查和 HTML 标记检查
2. 每个检查器完成时，把结果或错误记入成功/错误通道
3. 两个检查器都完成后，把各通道交给报告器，并只触发一次终止回调
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional

from a11ym.checkers.accessibility import AccessibilityChecker
from a11ym.checkers.markup import MarkupValidator
from a11ym.core.config import RunConfiguration
from a11ym.core.errors import A11ymError, AdapterError, AggregationFatalError
from a11ym.core.models import EpisodeOutcome, Finding
from a11ym.reporters.base import Reporter

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[list[Finding]], None]
ErrorCallback = Callable[[list[A11ymError]], None]


class EpisodeState(Enum):
    """聚合过程状态"""
    PENDING = "pending"
    AWAITING_SECOND = "awaiting_second"
    DONE = "done"


class Channel:
    """
    单个通道：累加器、待完成计数和完成信号

    Attributes:
        pending: 尚未报告的检查器数量
        accumulator: 按完成顺序累加的内容
        contributions: 落在本通道上的完成事件数量
        completed: 聚合结束时以累加器内容完成的 future
    """

    def __init__(self, pending: int, completed: asyncio.Future):
        self.pending = pending
        self.accumulator: list = []
        self.contributions = 0
        self.completed = completed


class AggregationEpisode:
    """一个 URL 的聚合过程"""

    CONTRIBUTORS = 2

    def __init__(self, url: str, reporter: Reporter):
        loop = asyncio.get_running_loop()
        self.url = url
        self.reporter = reporter
        self.success = Channel(self.CONTRIBUTORS, loop.create_future())
        self.error = Channel(self.CONTRIBUTORS, loop.create_future())

    @property
    def state(self) -> EpisodeState:
        reported = self.CONTRIBUTORS - self.success.pending
        if reported == 0:
            return EpisodeState.PENDING
        if reported < self.CONTRIBUTORS:
            return EpisodeState.AWAITING_SECOND
        return EpisodeState.DONE

    def succeed(self, findings: list[Finding]) -> None:
        """记录一个检查器的成功结果"""
        self._complete(self.success, findings)

    def fail(self, error: A11ymError) -> None:
        """记录一个检查器的错误"""
        self._complete(self.error, [error])

    def _complete(self, channel: Channel, values: list) -> None:
        if self.state is EpisodeState.DONE:
            raise RuntimeError(f"Aggregation for {self.url} already completed")

        channel.accumulator.extend(values)
        channel.contributions += 1
        # 无论落在哪个通道，一次完成都计入两个通道
        self.success.pending -= 1
        self.error.pending -= 1

        if self.state is EpisodeState.DONE:
            self._close()

    def _close(self) -> None:
        findings = list(self.success.accumulator)
        errors = list(self.error.accumulator)

        if self.success.contributions:
            self.reporter.results(findings, self.url)
        if self.error.contributions:
            self.reporter.error(errors, self.url)

        self.success.completed.set_result(findings)
        self.error.completed.set_result(errors)

    async def wait(self) -> EpisodeOutcome:
        """等待两个检查器都报告完毕"""
        findings = await self.success.completed
        errors = await self.error.completed
        return EpisodeOutcome(url=self.url, findings=findings, errors=errors)


class Tester:
    """
    检查运行器

    由只读配置构建，可对任意多个 URL 重复调用 run()，
    各 URL 之间除报告器外不共享可变状态。
    """

    def __init__(
        self,
        configuration: RunConfiguration,
        reporter: Reporter,
        checker: Optional[AccessibilityChecker] = None,
        validator: Optional[MarkupValidator] = None,
    ):
        self.configuration = configuration
        self.reporter = reporter
        self.checker = checker or AccessibilityChecker(configuration)
        self.validator = validator or MarkupValidator(configuration)

    async def run(
        self,
        url: str,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> EpisodeOutcome:
        """
        检查一个 URL

        Args:
            url: 目标 URL
            on_success: 两个检查器都成功时以合并结果调用
            on_error: 任一检查器失败或发生致命错误时以错误列表调用

        Returns:
            EpisodeOutcome，致命错误记录在 fatal 字段中而不是抛出
        """
        timeout = self.configuration.timeout

        try:
            if timeout is None:
                outcome = await self._run_episode(url)
            else:
                outcome = await asyncio.wait_for(self._run_episode(url), timeout)
        except asyncio.TimeoutError:
            fatal = AggregationFatalError(f"Timed out after {timeout:g} seconds", url)
            logger.warning("%s: %s", url, fatal)
            self._report_fatal(fatal, url)
            outcome = EpisodeOutcome(url=url, fatal=fatal)
        except AggregationFatalError as fatal:
            outcome = EpisodeOutcome(url=url, fatal=fatal)

        if outcome.fatal is not None:
            if on_error is not None:
                on_error([outcome.fatal])
        elif outcome.errors:
            if on_error is not None:
                on_error(outcome.errors)
        elif on_success is not None:
            on_success(outcome.findings)

        return outcome

    async def run_many(self, urls: Iterable[str]) -> list[EpisodeOutcome]:
        """并发检查多个 URL，每个 URL 的结果互相独立"""
        semaphore = asyncio.Semaphore(self.configuration.concurrency)

        async def bounded(url: str) -> EpisodeOutcome:
            async with semaphore:
                return await self.run(url)

        return list(await asyncio.gather(*(bounded(url) for url in urls)))

    async def _run_episode(self, url: str) -> EpisodeOutcome:
        episode = AggregationEpisode(url, self.reporter)
        tasks: list[asyncio.Task] = []

        try:
            tasks.append(asyncio.create_task(self._contribute(episode, self.checker.check, url)))
            tasks.append(asyncio.create_task(self._contribute(episode, self.validator.validate, url)))
            await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            await self._cancel(tasks)
            raise
        except Exception as e:
            await self._cancel(tasks)
            logger.exception("Checking %s failed", url)
            fatal = AggregationFatalError(f"{type(e).__name__}: {e}", url, cause=e)
            self._report_fatal(fatal, url)
            raise fatal from e

        return await episode.wait()

    @staticmethod
    async def _contribute(
        episode: AggregationEpisode,
        check: Callable[[str], Awaitable[list[Finding]]],
        url: str,
    ) -> None:
        try:
            findings = await check(url)
        except AdapterError as e:
            logger.debug("%s", e)
            episode.fail(e)
        else:
            episode.succeed(findings)

    @staticmethod
    async def _cancel(tasks: list[asyncio.Task]) -> None:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _report_fatal(self, fatal: AggregationFatalError, url: str) -> None:
        """把致命错误交给报告器；报告器自身出错时只记录日志，不影响其他 URL"""
        try:
            self.reporter.error([fatal], url)
        except Exception:
            logger.exception("Reporting the failure of %s failed", url)
