"""ロガー設定"""

import sys

from loguru import logger


def setup_logger(level: str = "INFO") -> None:
    """アプリケーションロガーを設定"""
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "{message}"
        ),
        level=level,
        colorize=True,
    )


def step(message: str) -> None:
    """処理ステップをログ出力"""
    logger.info(f"⏳ {message}")


def success(message: str) -> None:
    """成功メッセージをログ出力"""
    logger.success(f"✅ {message}")


def warn(message: str) -> None:
    logger.warning(f"⚠ {message}")


def error(message: str) -> None:
    logger.error(f"✗ {message}")


def exception(message: str) -> None:
    """例外をトレースバック付きでログ出力"""
    logger.opt(exception=True).error(f"✗ {message}")
