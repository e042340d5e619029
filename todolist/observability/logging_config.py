"""
结构化日志配置：structlog 接管标准库 logging

- 业务日志（structlog）和 uvicorn 等第三方库日志（logging）走同一个 Handler、同一个渲染器
- 开发环境：彩色文本；生产环境：JSON（中文原样输出）
- 可重复调用：每次调用替换根 Handler，不会叠加输出
"""

import logging
import sys

import structlog

# structlog 事件和标准库记录共用的前置处理器
_PRE_CHAIN: list = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _render_processors(env: str) -> list:
    if env == "production":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(env: str = "development", level: str = "INFO") -> None:
    """初始化日志，应用启动时调用"""
    log_level = logging.getLevelName(level.upper())

    structlog.configure(
        processors=[
            *_PRE_CHAIN,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_processors(env),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # uvicorn 自带 Handler，去掉后统一冒泡到根 Handler
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True
