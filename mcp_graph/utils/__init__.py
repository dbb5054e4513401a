"""유틸리티 모듈"""

from .logger import get_logger, setup_logger

__all__ = ["setup_logger", "get_logger"]
