"""
统一日志配置模块

提供结构化日志、文件轮转、耗时记录等功能
"""

import os
import sys
import time
import logging
import orjson
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional
from pathlib import Path
from functools import wraps


# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = Path(os.getenv('PINYINENGINE_LOG_DIR', PROJECT_ROOT / 'logs'))


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


class JsonFormatter(logging.Formatter):
    """JSON 格式日志（便于日志分析工具解析）"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # 额外字段
        if hasattr(record, 'duration_ms'):
            log_data['duration_ms'] = record.duration_ms
        if hasattr(record, 'extra_data'):
            log_data['data'] = record.extra_data

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return orjson.dumps(log_data, default=str).decode('utf-8')


class ColorFormatter(logging.Formatter):
    """彩色控制台输出"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # 复制一份，避免颜色码污染同一记录的其他 handler
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(
    name: str = 'pinyinengine',
    level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    log_to_console: bool = True,
    json_format: Optional[bool] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    配置日志系统

    Args:
        name: 日志器名称
        level: 日志级别，缺省读取 PINYINENGINE_LOG_LEVEL（默认 INFO）
        log_to_file: 是否写入文件，缺省读取 PINYINENGINE_LOG_FILE
        log_to_console: 是否输出到控制台（stderr）
        json_format: 是否使用 JSON 格式，缺省读取 PINYINENGINE_LOG_JSON
        max_bytes: 单个日志文件最大大小
        backup_count: 保留的日志文件数量

    Returns:
        配置好的 Logger 实例
    """
    if level is None:
        level = os.getenv('PINYINENGINE_LOG_LEVEL', 'INFO')
    if log_to_file is None:
        log_to_file = _env_flag('PINYINENGINE_LOG_FILE', False)
    if json_format is None:
        json_format = _env_flag('PINYINENGINE_LOG_JSON', False)

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # 清除已有 handlers（避免重复添加）
    logger.handlers.clear()

    detailed_format = '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'
    simple_format = '%(asctime)s | %(levelname)-8s | %(message)s'

    # 控制台输出走 stderr，stdout 留给命令行结果
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG)

        if json_format:
            console_handler.setFormatter(JsonFormatter())
        elif sys.stderr.isatty():
            console_handler.setFormatter(ColorFormatter(simple_format))
        else:
            console_handler.setFormatter(logging.Formatter(simple_format))

        logger.addHandler(console_handler)

    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)

        # 主日志文件（轮转）
        file_handler = RotatingFileHandler(
            LOG_DIR / f'{name}.log',
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        if json_format:
            file_handler.setFormatter(JsonFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(detailed_format))
        logger.addHandler(file_handler)

        # 错误日志单独文件
        error_handler = RotatingFileHandler(
            LOG_DIR / f'{name}_error.log',
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(logging.Formatter(detailed_format))
        logger.addHandler(error_handler)

    # 子日志器不再向根 logger 重复输出
    logger.propagate = False
    return logger


def get_logger(name: str = 'pinyinengine') -> logging.Logger:
    """获取已配置的 logger（如果未配置则自动配置）"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logging(name)
    return logger


def log_execution_time(logger: Optional[logging.Logger] = None):
    """装饰器：记录函数执行时间"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            nonlocal logger
            if logger is None:
                logger = get_logger()

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                logger.error(f"{func.__name__} 执行失败, 耗时: {elapsed:.2f}ms, 错误: {e}")
                raise
            elapsed = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__name__} 执行完成, 耗时: {elapsed:.2f}ms")
            return result
        return wrapper
    return decorator


# 预配置的日志器
engine_logger = None
io_logger = None
cli_logger = None


def get_engine_logger() -> logging.Logger:
    """获取引擎日志器"""
    global engine_logger
    if engine_logger is None:
        engine_logger = get_logger('pinyinengine.engine')
    return engine_logger


def get_io_logger() -> logging.Logger:
    """获取词典读写日志器"""
    global io_logger
    if io_logger is None:
        io_logger = get_logger('pinyinengine.io')
    return io_logger


def get_cli_logger() -> logging.Logger:
    """获取命令行日志器"""
    global cli_logger
    if cli_logger is None:
        cli_logger = get_logger('pinyinengine.cli')
    return cli_logger
