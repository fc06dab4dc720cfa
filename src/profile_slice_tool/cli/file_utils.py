"""
文件处理工具模块
"""

import gzip
import re
from pathlib import Path
from typing import Union

PROFILE_SUFFIXES = ('.json', '.json.gz')


def resolve_input_file(file_path: str) -> Path:
    """
    验证输入文件存在且为 JSON 格式

    Args:
        file_path: 文件路径

    Returns:
        Path: 文件路径

    Raises:
        ValueError: 文件不存在或者不是 .json / .json.gz 文件
    """
    path = Path(file_path)
    if not path.exists():
        raise ValueError(f"文件不存在: {file_path}")
    if not path.is_file():
        raise ValueError(f"不是文件: {file_path}")
    if not path.name.lower().endswith(PROFILE_SUFFIXES):
        raise ValueError(f"文件不是 JSON 格式: {file_path}")
    return path


def read_text(file_path: Union[str, Path]) -> str:
    """读取文本文件，.gz 文件自动解压"""
    file_path = Path(file_path)
    open_func = gzip.open if file_path.suffix == '.gz' else open
    with open_func(file_path, 'rt', encoding='utf-8') as f:
        return f.read()


def write_text(text: str, file_path: Union[str, Path]) -> Path:
    """写入文本文件，必要时创建父目录"""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(text)
    return file_path


def sanitize_file_name(file_name: str) -> str:
    """替换文件名中在常见文件系统上不合法的字符"""
    return re.sub(r'[\\/:*?"<>|\s]+', '_', file_name)
