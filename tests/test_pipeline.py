import unittest

from profile_slice_tool.call_tree_builder import CallTreeProfileBuilder
from profile_slice_tool.codec import encode
from profile_slice_tool.errors import InvalidWindowError
from profile_slice_tool.interval_filter import TieBreak
from profile_slice_tool.pipeline import (
    default_window,
    export_file_name,
    export_interval,
    percent_to_value,
)
from profile_slice_tool.serializer import dumps_document

from sample_profiles import build_deep_profile, build_nested_profile


class TestExportInterval(unittest.TestCase):
    """测试区间导出流程"""

    def setUp(self):
        self.profile, _ = build_nested_profile()

    def test_export_statistics(self):
        result = export_interval(self.profile, 200, 600)
        self.assertEqual(result.frame_count, 3)
        self.assertEqual(result.event_count, 6)
        self.assertEqual((result.start_value, result.end_value), (200, 600))
        self.assertEqual(result.requested_weight, 400)
        self.assertEqual(result.filter_result.synthetic_count, 1)

    def test_empty_window(self):
        result = export_interval(self.profile, 1000, 2000)
        self.assertEqual(result.event_count, 0)
        self.assertEqual(result.frame_count, 0)
        self.assertEqual((result.start_value, result.end_value), (0, 0))
        self.assertEqual(result.requested_weight, 1000)

    def test_single_call_window(self):
        result = export_interval(self.profile, 300, 400)
        self.assertEqual(result.frame_count, 1)
        self.assertEqual(result.document['shared']['frames'][0]['name'], 'functionC()')

    def test_invalid_window(self):
        with self.assertRaises(InvalidWindowError):
            export_interval(self.profile, 600, 200)

    def test_source_profile_unchanged(self):
        before = encode(self.profile)
        export_interval(self.profile, 350, 650)
        self.assertEqual(encode(self.profile), before)

    def test_repeated_exports_are_independent(self):
        first = dumps_document(export_interval(self.profile, 200, 600).document)
        export_interval(self.profile, 350, 450, tie_break=TieBreak.STABLE)
        second = dumps_document(export_interval(self.profile, 200, 600).document)
        self.assertEqual(first, second)

    def test_custom_exporter(self):
        result = export_interval(self.profile, 200, 600, exporter='custom@0.1')
        self.assertEqual(result.document['exporter'], 'custom@0.1')

    def test_deep_profile_window(self):
        profile = build_deep_profile()
        result = export_interval(profile, 110000, 140000)
        entry = result.profile_entry
        # 完全覆盖区间的外层调用在区间内既没有 Open 也没有 Close，不会出现在结果中
        self.assertEqual([frame['name'] for frame in result.document['shared']['frames']],
                         [f'level{i}()' for i in range(4, 10)])
        self.assertEqual((entry['startValue'], entry['endValue']), (112000, 140000))
        self.assertEqual(result.event_count, 12)
        self.assertEqual(result.filter_result.synthetic_count, 3)


class TestWindowHelpers(unittest.TestCase):
    def test_default_window(self):
        profile, _ = build_nested_profile()
        self.assertEqual(default_window(profile), (0, 720))

    def test_default_window_small_total(self):
        self.assertEqual(default_window(CallTreeProfileBuilder(3).build()), (0, 2))
        self.assertEqual(default_window(CallTreeProfileBuilder(0.5).build()), (0, 0))

    def test_default_window_offset(self):
        profile = CallTreeProfileBuilder(100, start_value=50).build()
        self.assertEqual(default_window(profile), (50, 130))

    def test_percent_to_value(self):
        profile, _ = build_nested_profile()
        self.assertEqual(percent_to_value(profile, 50), 450)
        self.assertEqual(percent_to_value(profile, 0), 0)

    def test_export_file_name(self):
        profile, _ = build_nested_profile()
        self.assertEqual(export_file_name(profile, 200, 600), 'speedscope-filtered-200.00ms-to-600.00ms.json')
        self.assertEqual(export_file_name(profile, 200, 600, 'txt'), 'speedscope-interval-200.00ms-to-600.00ms.txt')


if __name__ == '__main__':
    unittest.main()
