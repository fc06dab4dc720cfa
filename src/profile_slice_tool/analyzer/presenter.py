# -*- coding: utf-8 -*-
"""
帧统计的展示: CSV / Excel 文件与 markdown 表格
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from ..models import Profile
from .summary import FrameStatistics

logger = logging.getLogger(__name__)

SUPPORTED_OUTPUT_FORMATS = ('csv', 'xlsx')


def build_summary_rows(stats: Sequence[FrameStatistics], profile: Profile) -> List[Dict[str, Any]]:
    """
    把帧统计转换为表格行

    Args:
        stats: 帧统计列表
        profile: 统计所属的 profile，用于格式化权重和计算占比

    Returns:
        List[Dict[str, Any]]: 表格行
    """
    rows = []
    for item in stats:
        ratio = item.total_weight / profile.total_weight if profile.total_weight else 0.0
        rows.append({
            'name': item.name,
            'location': item.location or '',
            'call_count': item.call_count,
            'total_weight': item.total_weight,
            'self_weight': item.self_weight,
            'total': profile.format_value(item.total_weight),
            'self': profile.format_value(item.self_weight),
            'total_ratio': round(ratio, 4),
        })
    return rows


def generate_output_files(rows: List[Dict[str, Any]], output_dir: str, base_name: str,
                          output_formats: Sequence[str] = SUPPORTED_OUTPUT_FORMATS) -> List[Path]:
    """
    生成输出文件 (CSV和Excel)

    Args:
        rows: 数据行列表
        output_dir: 输出目录
        base_name: 基础文件名
        output_formats: 输出格式列表，支持 csv / xlsx

    Returns:
        List[Path]: 生成的文件路径列表
    """
    if not rows:
        logger.warning("没有数据可供展示")
        return []

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(rows)
    files = []

    if 'csv' in output_formats:
        csv_file = output_path / f"{base_name}.csv"
        df.to_csv(csv_file, index=False)
        files.append(csv_file)
        print(f"生成 CSV 文件: {csv_file}")

    if 'xlsx' in output_formats:
        excel_file = output_path / f"{base_name}.xlsx"
        df.to_excel(excel_file, index=False, sheet_name='frames')
        files.append(excel_file)
        print(f"生成 Excel 文件: {excel_file}")

    return files


def print_markdown_table(rows: List[Dict[str, Any]], title: str) -> None:
    """打印markdown格式的表格"""
    if not rows:
        print(f"# {title}\n\n没有数据可显示")
        return

    print(f"# {title}\n")

    columns = list(rows[0].keys())
    print("| " + " | ".join(columns) + " |")
    print("| " + " | ".join(["---"] * len(columns)) + " |")

    for row in rows:
        values = []
        for col in columns:
            value = row.get(col, "")
            # markdown 表格中的竖线需要转义
            if isinstance(value, str):
                value = value.replace("|", "\\|")
            values.append(str(value))
        print("| " + " | ".join(values) + " |")

    print()
