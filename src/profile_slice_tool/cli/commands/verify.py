"""
往返校验命令模块
"""

import difflib

from ...parser import parse_profile_document
from ...serializer import dumps_document, export_profile_group
from ..file_utils import read_text, resolve_input_file

# 不一致时最多打印的 diff 行数
MAX_DIFF_LINES = 40


class VerifyCommand:
    """往返校验命令处理器"""

    def run(self, args) -> int:
        """导入文档后重新导出，检查输出与输入是否逐字节一致"""
        print("=== 往返校验 ===")
        print(f"文件: {args.file}")

        try:
            path = resolve_input_file(args.file)
            original = read_text(path)
            group = parse_profile_document(original)
            re_exported = dumps_document(export_profile_group(group))
        except (ValueError, OSError) as e:
            print(f"错误: {e}")
            return 1

        if re_exported == original:
            print(f"一致: {len(group.profiles)} 个 profile 重新导出后与输入逐字节相同")
            return 0

        print("不一致: 重新导出的文档与输入不同")
        diff = difflib.unified_diff(
            original.splitlines(), re_exported.splitlines(),
            fromfile=str(path), tofile='re-exported', lineterm='',
        )
        for i, line in enumerate(diff):
            if i >= MAX_DIFF_LINES:
                print("  ...")
                break
            print(f"  {line}")
        return 1
