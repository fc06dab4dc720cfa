"""
帧统计命令模块
"""

from ...analyzer import build_summary_rows, calculate_frame_statistics, generate_output_files, print_markdown_table
from ...parser import import_profile_group
from ...pipeline import export_interval
from ..file_utils import sanitize_file_name
from ..validators import parse_output_formats, parse_window_bound
from .base import ProfileCommand

SUMMARY_OUTPUT_FORMATS = ('csv', 'xlsx')


class SummaryCommand(ProfileCommand):
    """帧统计命令处理器"""

    def run(self, args) -> int:
        """统计 profile（或其中一个区间）每个帧的权重"""
        print("=== 帧统计 ===")
        print(f"文件: {args.file}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print()

        try:
            output_formats = parse_output_formats(args.output_format, SUMMARY_OUTPUT_FORMATS)
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        try:
            _, profile = self.load_profile(args.file, args.profile_index)

            # 只有指定了区间时才先做区间导出，再对导出的 profile 做统计
            if parse_window_bound(args.start, profile) is not None or parse_window_bound(args.end, profile) is not None:
                start, end = self.resolve_window(args, profile)
                result = export_interval(profile, start, end)
                profile = import_profile_group(result.document).active_profile
                print(f"统计区间: {result.document['name']}")

            stats = calculate_frame_statistics(profile)
            rows = build_summary_rows(stats, profile)

            if args.print_markdown:
                print_markdown_table(rows, f"{profile.name} 帧统计")

            base_name = sanitize_file_name(f"frame_summary_{args.label or profile.name}")
            generated_files = generate_output_files(rows, args.output_dir, base_name, output_formats)

            print(f"\n统计完成: {len(rows)} 个帧")
            for file_path in generated_files:
                print(f"  {file_path}")
            return 0

        except (ValueError, OSError) as e:
            print(f"错误: {e}")
            return 1
