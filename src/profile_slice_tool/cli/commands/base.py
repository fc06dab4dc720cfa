"""
命令公共逻辑
"""

from typing import Tuple

from ...models import Profile, ProfileGroup
from ...parser import load_profile_group
from ...pipeline import default_window
from ..file_utils import resolve_input_file
from ..validators import parse_window_bound, validate_profile_index


class ProfileCommand:
    """读取文档并选择 profile 的命令基类"""

    def load_profile(self, file_path: str, profile_index=None) -> Tuple[ProfileGroup, Profile]:
        """
        读取文档并返回选中的 profile

        Args:
            file_path: 文档路径
            profile_index: profile 索引，None 时使用文档的 activeProfileIndex

        Returns:
            Tuple[ProfileGroup, Profile]: 文档对应的 ProfileGroup 和选中的 profile
        """
        path = resolve_input_file(file_path)
        group = load_profile_group(path)
        validate_profile_index(profile_index, len(group.profiles))
        index = group.index_to_view if profile_index is None else profile_index
        profile = group.profiles[index]
        print(f"读取到 {len(group.profiles)} 个 profile，使用第 {index} 个: {profile.name}")
        return group, profile

    def resolve_window(self, args, profile: Profile) -> Tuple[float, float]:
        """根据 --start/--end 参数确定区间，未指定的一侧使用默认区间"""
        default_start, default_end = default_window(profile)
        start = parse_window_bound(getattr(args, 'start', None), profile)
        end = parse_window_bound(getattr(args, 'end', None), profile)
        return (default_start if start is None else start,
                default_end if end is None else end)
