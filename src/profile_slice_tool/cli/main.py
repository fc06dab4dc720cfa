"""
CLI主模块
"""

import argparse
import logging
import sys

from .commands import SliceCommand, SummaryCommand, VerifyCommand


def parse_arguments(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="Profile Slice Tool - 把调用树 profile 的任意区间导出为独立的规范文档",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 导出 [200, 600] 区间 (权重坐标，单位与 profile 相同)
  profile-slice-tool slice profile.json --start 200 --end 600

  # 使用总权重的百分比指定区间，同时导出 JSON 和调用栈文本
  profile-slice-tool slice profile.json --start 10% --end 40% --output-format json,txt

  # 不指定区间时使用默认区间 (总权重的前 80%)
  profile-slice-tool slice profile.json --output-dir out/

  # 使用稳定排序处理同一时刻的边界事件
  profile-slice-tool slice profile.json --start 200 --end 600 --tie-break stable

  # 统计每个帧的总权重和自身权重，并打印 markdown 表格
  profile-slice-tool summary profile.json --print-markdown --output-format csv,xlsx

  # 只统计一个区间
  profile-slice-tool summary profile.json --start 200 --end 600 --output-format csv

  # 校验文档导入后重新导出是否逐字节一致
  profile-slice-tool verify speedscope-filtered-200.00ms-to-600.00ms.json
        """
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='日志级别 (默认: WARNING)')

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # slice 命令 - 区间导出
    slice_parser = subparsers.add_parser('slice', help='把 profile 的一个区间导出为独立文档')
    slice_parser.add_argument('file', help='要导出的文档路径 (.json 或 .json.gz)')
    slice_parser.add_argument('--start', default=None,
                              help='区间起点，权重坐标或总权重百分比 (如 "25%%")，默认为 profile 起点')
    slice_parser.add_argument('--end', default=None,
                              help='区间终点，权重坐标或总权重百分比，默认为总权重的 80%%')
    slice_parser.add_argument('--profile-index', type=int, default=None,
                              help='要导出的 profile 索引 (默认: 文档的 activeProfileIndex)')
    slice_parser.add_argument('--tie-break', default='nested', choices=['nested', 'stable'],
                              help='同一时刻事件的排序规则:\n'
                                   '  nested: 合成 Open 在前、合成 Close 在后，保持嵌套结构\n'
                                   '  stable: 稳定排序，选中事件在前、合成事件在后\n'
                                   '(默认: nested)')
    slice_parser.add_argument('--output-format', default='json',
                              help='输出格式，逗号分隔: json, txt (默认: json)')
    slice_parser.add_argument('--output-dir', default='.', help='输出目录 (默认: 当前目录)')

    # summary 命令 - 帧统计
    summary_parser = subparsers.add_parser('summary', help='统计每个帧的调用次数、总权重和自身权重')
    summary_parser.add_argument('file', help='要统计的文档路径 (.json 或 .json.gz)')
    summary_parser.add_argument('--start', default=None, help='只统计该区间，区间起点')
    summary_parser.add_argument('--end', default=None, help='只统计该区间，区间终点')
    summary_parser.add_argument('--profile-index', type=int, default=None,
                                help='要统计的 profile 索引 (默认: 文档的 activeProfileIndex)')
    summary_parser.add_argument('--label', default=None, help='输出文件标签 (默认: profile 名称)')
    summary_parser.add_argument('--print-markdown', action='store_true',
                                help='是否在stdout中以markdown格式打印表格 (默认: False)')
    summary_parser.add_argument('--output-format', default='csv,xlsx',
                                help='输出格式，逗号分隔: csv, xlsx (默认: csv,xlsx)')
    summary_parser.add_argument('--output-dir', default='.', help='输出目录 (默认: 当前目录)')

    # verify 命令 - 往返校验
    verify_parser = subparsers.add_parser('verify', help='校验文档导入后重新导出是否逐字节一致')
    verify_parser.add_argument('file', help='要校验的文档路径 (.json 或 .json.gz)')

    return parser.parse_args(argv)


def main(argv=None):
    """主函数"""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if not args.command:
        print("错误: 请指定命令 (slice, summary, verify)")
        print("使用 --help 查看帮助信息")
        return 1

    if args.command == 'slice':
        command = SliceCommand()
    elif args.command == 'summary':
        command = SummaryCommand()
    elif args.command == 'verify':
        command = VerifyCommand()
    else:
        print(f"错误: 未知命令: {args.command}")
        return 1
    return command.run(args)


if __name__ == "__main__":
    sys.exit(main())
