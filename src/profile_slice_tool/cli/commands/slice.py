"""
区间导出命令模块
"""

import time
from pathlib import Path

from ...pipeline import export_file_name, export_interval
from ...serializer import save_document
from ...text_export import export_interval_text
from ..file_utils import sanitize_file_name, write_text
from ..validators import parse_output_formats, parse_tie_break
from .base import ProfileCommand

SLICE_OUTPUT_FORMATS = ('json', 'txt')


class SliceCommand(ProfileCommand):
    """区间导出命令处理器"""

    def run(self, args) -> int:
        """把 profile 的一个区间导出为独立文档"""
        print("=== 区间导出 ===")
        print(f"文件: {args.file}")
        print(f"区间: [{args.start or '默认'}, {args.end or '默认'}]")
        print(f"同时刻排序规则: {args.tie_break}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print()

        try:
            output_formats = parse_output_formats(args.output_format, SLICE_OUTPUT_FORMATS)
            tie_break = parse_tie_break(args.tie_break)
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        try:
            start_time = time.time()
            _, profile = self.load_profile(args.file, args.profile_index)
            start, end = self.resolve_window(args, profile)
            print(f"导出区间: {profile.format_value(start)} - {profile.format_value(end)}")

            output_dir = Path(args.output_dir)
            generated_files = []

            if 'json' in output_formats:
                result = export_interval(profile, start, end, tie_break=tie_break)
                file_name = sanitize_file_name(export_file_name(profile, start, end, 'json'))
                generated_files.append(save_document(result.document, output_dir / file_name))
                print(f"选中 {result.filter_result.selected_count} 个事件, "
                      f"合成 {result.filter_result.synthetic_count} 个边界事件, "
                      f"保留 {result.frame_count} 个帧")
                print(f"文档区间: [{result.start_value}, {result.end_value}]")

            if 'txt' in output_formats:
                text = export_interval_text(profile, start, end, tie_break=tie_break)
                file_name = sanitize_file_name(export_file_name(profile, start, end, 'txt'))
                generated_files.append(write_text(text, output_dir / file_name))

            print(f"\n导出完成，总耗时: {time.time() - start_time:.2f} 秒")
            print("\n生成的文件:")
            for file_path in generated_files:
                print(f"  {file_path}")
            return 0

        except (ValueError, OSError) as e:
            print(f"错误: {e}")
            return 1
