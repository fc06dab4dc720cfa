"""
测试用的示例 profile
"""

from profile_slice_tool.call_tree_builder import CallTreeProfileBuilder
from profile_slice_tool.models import Frame
from profile_slice_tool.utils.value_formatters import TimeFormatter


def build_nested_profile(total_weight=900, name='Test Profile'):
    """
    main()[0,900] -> functionA()[100,800] -> functionB()[200,500] -> functionC()[300,400]
                                          -> functionD()[600,700]
    """
    frames = {
        'main': Frame(name='main()'),
        'A': Frame(name='functionA()', file='test.js', line=10),
        'B': Frame(name='functionB()', file='test.js', line=20),
        'C': Frame(name='functionC()', file='test.js', line=30, col=5),
        'D': Frame(name='functionD()', file='test.js', line=40),
    }
    builder = CallTreeProfileBuilder(total_weight)
    builder.set_name(name)
    builder.set_value_formatter(TimeFormatter('milliseconds'))
    builder.enter_frame(frames['main'], 0)
    builder.enter_frame(frames['A'], 100)
    builder.enter_frame(frames['B'], 200)
    builder.enter_frame(frames['C'], 300)
    builder.leave_frame(frames['C'], 400)
    builder.leave_frame(frames['B'], 500)
    builder.enter_frame(frames['D'], 600)
    builder.leave_frame(frames['D'], 700)
    builder.leave_frame(frames['A'], 800)
    builder.leave_frame(frames['main'], 900)
    return builder.build(), frames


def build_recursive_profile():
    """main()[0,100] -> f()[10,90] -> f()[20,80]，两层 f 是同一个帧"""
    main = Frame(name='main()')
    recursive = Frame(name='f()')
    builder = CallTreeProfileBuilder(100)
    builder.set_name('Recursive Profile')
    builder.set_value_formatter(TimeFormatter('microseconds'))
    builder.enter_frame(main, 0)
    builder.enter_frame(recursive, 10)
    builder.enter_frame(recursive, 20)
    builder.leave_frame(recursive, 80)
    builder.leave_frame(recursive, 90)
    builder.leave_frame(main, 100)
    return builder.build()


def build_deep_profile(depth=10, step=3000, start=100000):
    """一条 depth 层深的调用链，每层在两侧各缩进 step"""
    frames = [Frame(name=f'level{i}()', file=f'level{i}.m', line=100 + i) for i in range(depth)]
    builder = CallTreeProfileBuilder(start + 2 * depth * step)
    builder.set_name('Deep Profile')
    builder.set_value_formatter(TimeFormatter('milliseconds'))
    for i, frame in enumerate(frames):
        builder.enter_frame(frame, start + i * step)
    for i, frame in reversed(list(enumerate(frames))):
        builder.leave_frame(frame, start + (2 * depth - i) * step)
    return builder.build()
