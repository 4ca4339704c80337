"""Telemetry - 统一日志和指标入口

日志格式: [Component] msg
指标示例: hooks.runs, hooks.rejected, queue.depth, commit.created
"""

import logging

from . import config


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger"""
    return logging.getLogger(name)


def setup_logging(level: str | None = None) -> None:
    """配置根 logger（由 CLI 入口调用）

    Args:
        level: 日志级别名，None 使用 config.LOG_LEVEL
    """
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format=config.LOG_FORMAT,
    )


def truncate(text: str, max_len: int = config.LOG_MAX_DIAGNOSTIC_LEN) -> str:
    """截断日志中的长文本（hook 输出可能很长）"""
    text = text.rstrip("\n")
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


class Metrics:
    """进程内指标

    记录 hook、事件队列和提交流程的运行情况，只保存在内存里，供调试和测试读取：
    - hooks.runs / hooks.rejected / hooks.skipped，标签 hook=commit-msg|post-commit
    - queue.pushed（标签 event）、queue.processed，gauge queue.depth
    - commit.created / commit.aborted、changes.index

    键由名字和排序后的标签组成，如 "hooks.runs{hook=commit-msg}"。
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    @staticmethod
    def key(name: str, labels: dict[str, str] | None = None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """计数器加 value，如 inc("hooks.rejected", {"hook": "commit-msg"})"""
        k = self.key(name, labels)
        self._counters[k] = self._counters.get(k, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        self._gauges[self.key(name, labels)] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters.get(self.key(name, labels), 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        return self._gauges.get(self.key(name, labels), 0.0)

    def counters(self, prefix: str = "") -> dict[str, int]:
        """按前缀取出计数器快照，如 counters("hooks.") 得到所有 hook 相关计数"""
        return {k: v for k, v in sorted(self._counters.items()) if k.startswith(prefix)}

    def reset(self) -> None:
        self._counters.clear()
        self._gauges.clear()


# 全局指标实例
metrics = Metrics()
