#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Profile Slice Tool 主入口
支持 python3 -m profile_slice_tool 调用
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())
