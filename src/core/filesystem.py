"""
프로젝트 디렉터리 초기화 (idempotent).

규칙:
- 이미 있으면 건드리지 않음 (덮어쓰기 금지)
- .env 생성은 파일 락으로 보호 → 동시 부트스트랩에서도 한 번만 생성
"""

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from filelock import FileLock, Timeout

from src.domain.constants import PROJECT_FOLDERS

logger = logging.getLogger(__name__)

# 락 timeout (초)
LOCK_TIMEOUT = 10.0
LOCKS_DIRNAME = ".locks"


@dataclass
class InitPaths:
    """초기화할 루트와 폴더 목록."""
    root_path: Path
    folder_names: list[str] = field(default_factory=lambda: list(PROJECT_FOLDERS))


def create_dir_if_not_exists(path: Path, mode: int = 0o755) -> bool:
    """
    디렉터리 생성 (없을 때만).

    Returns:
        True if created, False if already existed

    Raises:
        NotADirectoryError: 같은 이름의 파일이 있음
    """
    if path.is_dir():
        return False
    if path.exists():
        raise NotADirectoryError(f"Path exists and is not a directory: {path}")

    path.mkdir(mode=mode, parents=True, exist_ok=True)
    logger.debug(f"Created directory: {path}")
    return True


def create_file_if_not_exists(path: Path, content: str = "") -> bool:
    """
    파일 생성 (없을 때만).

    동시성: .locks/<name>.lock 파일 락 + temp → rename 원자적 쓰기.

    Returns:
        True if created, False if already existed

    Raises:
        TimeoutError: 락 획득 실패
    """
    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    locks_dir = path.parent / LOCKS_DIRNAME
    locks_dir.mkdir(exist_ok=True)
    lock = FileLock(locks_dir / f"{path.name}.lock", timeout=LOCK_TIMEOUT)

    try:
        with lock:
            # 락 획득 후 재확인
            if path.exists():
                return False

            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
    except Timeout as e:
        raise TimeoutError(f"Failed to acquire lock for {path}") from e

    logger.debug(f"Created file: {path}")
    return True


def init_paths(paths: InitPaths) -> list[Path]:
    """
    루트 아래 폴더 구조 생성.

    Returns:
        새로 생성된 폴더 목록
    """
    created = []
    for name in paths.folder_names:
        folder = paths.root_path / name
        if create_dir_if_not_exists(folder):
            created.append(folder)
    return created


def init_project(root_path: Path, folder_names: Iterable[str] | None = None) -> list[Path]:
    """기본 폴더 목록으로 init_paths 실행."""
    names = list(folder_names) if folder_names is not None else list(PROJECT_FOLDERS)
    return init_paths(InitPaths(root_path=Path(root_path), folder_names=names))
