"""
Core layer: 부트스트랩 기반 모듈.

역할:
- 프로젝트 폴더/.env 초기화 (idempotent)
- 로깅 설정
"""

from .filesystem import (
    InitPaths,
    create_dir_if_not_exists,
    create_file_if_not_exists,
    init_paths,
    init_project,
)
from .logging import configure_logging, get_logger

__all__ = [
    # filesystem
    "InitPaths",
    "create_dir_if_not_exists",
    "create_file_if_not_exists",
    "init_paths",
    "init_project",
    # logging
    "configure_logging",
    "get_logger",
]
