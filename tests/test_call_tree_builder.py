import unittest

from profile_slice_tool.call_tree_builder import CallTreeProfileBuilder
from profile_slice_tool.errors import StackDisciplineError
from profile_slice_tool.models import Frame, ProfileGroup, WeightUnit

from sample_profiles import build_nested_profile, build_recursive_profile


class TestCallTreeProfileBuilder(unittest.TestCase):
    """测试调用树构建"""

    def setUp(self):
        self.profile, self.frames = build_nested_profile()

    def test_tree_structure(self):
        root = self.profile.root
        self.assertTrue(root.is_root())
        self.assertEqual(len(root.children), 1)

        main = root.children[0]
        self.assertIs(main.frame, self.frames['main'])
        self.assertEqual((main.enter_weight, main.leave_weight), (0, 900))

        function_a = main.children[0]
        self.assertEqual([child.frame.name for child in function_a.children], ['functionB()', 'functionD()'])
        self.assertEqual(function_a.weight, 700)
        self.assertEqual(function_a.self_weight, 300)
        self.assertEqual(function_a.depth, 2)

        function_c = function_a.children[0].children[0]
        self.assertEqual(function_c.get_call_stack(), ['main()', 'functionA()', 'functionB()', 'functionC()'])

    def test_profile_metadata(self):
        self.assertEqual(self.profile.name, 'Test Profile')
        self.assertEqual(self.profile.weight_unit, WeightUnit.MILLISECONDS)
        self.assertEqual(self.profile.total_weight, 900)
        self.assertEqual(self.profile.start_value, 0)
        self.assertEqual(self.profile.end_value, 900)
        self.assertEqual(self.profile.format_value(200), '200.00ms')

    def test_leave_must_match_top_frame(self):
        builder = CallTreeProfileBuilder(100)
        outer, inner = Frame(name='outer'), Frame(name='inner')
        builder.enter_frame(outer, 0)
        builder.enter_frame(inner, 10)
        with self.assertRaises(StackDisciplineError):
            builder.leave_frame(outer, 20)

    def test_identical_fields_are_different_frames(self):
        builder = CallTreeProfileBuilder(100)
        first, second = Frame(name='same'), Frame(name='same')
        builder.enter_frame(first, 0)
        with self.assertRaises(StackDisciplineError):
            builder.leave_frame(second, 10)

    def test_leave_on_empty_stack(self):
        builder = CallTreeProfileBuilder(100)
        with self.assertRaises(StackDisciplineError):
            builder.leave_frame(Frame(name='f'), 0)

    def test_decreasing_value(self):
        builder = CallTreeProfileBuilder(100)
        frame = Frame(name='f')
        builder.enter_frame(frame, 50)
        with self.assertRaises(StackDisciplineError):
            builder.leave_frame(frame, 40)

    def test_build_with_open_frames(self):
        builder = CallTreeProfileBuilder(100)
        builder.enter_frame(Frame(name='f'), 0)
        with self.assertRaises(StackDisciplineError):
            builder.build()

    def test_builder_unusable_after_build(self):
        builder = CallTreeProfileBuilder(100)
        builder.build()
        with self.assertRaises(StackDisciplineError):
            builder.enter_frame(Frame(name='f'), 0)

    def test_set_weight_unit(self):
        builder = CallTreeProfileBuilder(2048)
        builder.set_weight_unit('bytes')
        profile = builder.build()
        self.assertEqual(profile.weight_unit, WeightUnit.BYTES)
        self.assertEqual(profile.format_value(2048), '2.00 KB')

    def test_start_value(self):
        builder = CallTreeProfileBuilder(50, start_value=1000)
        frame = Frame(name='f')
        builder.enter_frame(frame, 1010)
        builder.leave_frame(frame, 1020)
        profile = builder.build()
        self.assertEqual(profile.end_value, 1050)
        self.assertEqual((profile.root.enter_weight, profile.root.leave_weight), (1000, 1050))


class TestProfileTraversal(unittest.TestCase):
    """测试 Profile 的遍历与符号重映射"""

    def test_for_each_call_order(self):
        profile, _ = build_nested_profile()
        visited = []
        profile.for_each_call(
            lambda node, value: visited.append(('O', node.frame.name, value)),
            lambda node, value: visited.append(('C', node.frame.name, value)),
        )
        self.assertEqual(visited, [
            ('O', 'main()', 0),
            ('O', 'functionA()', 100),
            ('O', 'functionB()', 200),
            ('O', 'functionC()', 300),
            ('C', 'functionC()', 400),
            ('C', 'functionB()', 500),
            ('O', 'functionD()', 600),
            ('C', 'functionD()', 700),
            ('C', 'functionA()', 800),
            ('C', 'main()', 900),
        ])

    def test_frames_in_first_appearance_order(self):
        profile = build_recursive_profile()
        self.assertEqual([frame.name for frame in profile.frames()], ['main()', 'f()'])

    def test_remap_symbols_keeps_identity_grouping(self):
        profile = build_recursive_profile()
        calls = []

        def remap(frame):
            calls.append(frame.name)
            return 'renamed' if frame.name == 'f()' else None

        profile.remap_symbols(remap)
        self.assertEqual(calls, ['main()', 'f()'])

        outer = profile.root.children[0].children[0]
        inner = outer.children[0]
        self.assertEqual(outer.frame.name, 'renamed')
        self.assertIs(outer.frame, inner.frame)
        self.assertEqual(profile.root.children[0].frame.name, 'main()')
        self.assertEqual((inner.enter_weight, inner.leave_weight), (20, 80))

    def test_profile_group_active_profile(self):
        first, _ = build_nested_profile(name='first')
        second, _ = build_nested_profile(name='second')
        group = ProfileGroup(name='group', profiles=[first, second], index_to_view=1)
        self.assertIs(group.active_profile, second)
        self.assertIsNone(ProfileGroup(name='empty').active_profile)


if __name__ == '__main__':
    unittest.main()
