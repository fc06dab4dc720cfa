import copy
import gzip
import json
import os
import shutil
import tempfile
import unittest

from profile_slice_tool.errors import InvalidDocumentError, UnknownFrameReferenceError
from profile_slice_tool.models import ProfileGroup, WeightUnit
from profile_slice_tool.parser import (
    import_profile_group,
    load_document,
    load_profile_group,
    parse_profile_document,
)
from profile_slice_tool.serializer import dumps_document, export_profile_group, save_document

from sample_profiles import build_nested_profile


class TestImportProfileGroup(unittest.TestCase):
    """测试文档解析"""

    def setUp(self):
        profile, _ = build_nested_profile()
        self.document = export_profile_group(ProfileGroup(name='Test Profile', profiles=[profile]))

    def test_import(self):
        group = import_profile_group(self.document)
        self.assertEqual(group.name, 'Test Profile')
        self.assertEqual(len(group.profiles), 1)

        profile = group.active_profile
        self.assertEqual(profile.weight_unit, WeightUnit.MILLISECONDS)
        self.assertEqual(profile.total_weight, 900)
        self.assertEqual(profile.format_value(200), '200.00ms')
        self.assertEqual(len(list(profile.iter_nodes())), 5)

    def test_total_weight_from_bounds(self):
        document = copy.deepcopy(self.document)
        document['profiles'][0]['startValue'] = -100
        document['profiles'][0]['endValue'] = 1000
        profile = import_profile_group(document).active_profile
        self.assertEqual(profile.total_weight, 1100)
        self.assertEqual(profile.start_value, -100)

    def test_rejects_non_evented_profile(self):
        document = copy.deepcopy(self.document)
        document['profiles'][0]['type'] = 'sampled'
        with self.assertRaises(InvalidDocumentError):
            import_profile_group(document)

    def test_rejects_unknown_unit(self):
        document = copy.deepcopy(self.document)
        document['profiles'][0]['unit'] = 'furlongs'
        with self.assertRaises(InvalidDocumentError):
            import_profile_group(document)

    def test_rejects_bad_event(self):
        document = copy.deepcopy(self.document)
        document['profiles'][0]['events'][1]['type'] = 'X'
        with self.assertRaises(InvalidDocumentError):
            import_profile_group(document)

        document = copy.deepcopy(self.document)
        document['profiles'][0]['events'][1]['at'] = '100'
        with self.assertRaises(InvalidDocumentError):
            import_profile_group(document)

    def test_rejects_missing_sections(self):
        for key in ('shared', 'profiles'):
            document = copy.deepcopy(self.document)
            del document[key]
            with self.assertRaises(InvalidDocumentError):
                import_profile_group(document)
        with self.assertRaises(InvalidDocumentError):
            import_profile_group([])

    def test_rejects_active_profile_index_out_of_range(self):
        document = copy.deepcopy(self.document)
        document['activeProfileIndex'] = 3
        with self.assertRaises(InvalidDocumentError):
            import_profile_group(document)

    def test_rejects_non_finite_numbers(self):
        for field, position in (('at', 0), ('at', 3), ('startValue', None), ('endValue', None)):
            for value in (float('inf'), float('-inf'), float('nan')):
                document = copy.deepcopy(self.document)
                if position is None:
                    document['profiles'][0][field] = value
                else:
                    document['profiles'][0]['events'][position][field] = value
                # json.dumps 输出 Infinity / NaN，json.loads 会把它们还原为浮点数
                with self.assertRaises(InvalidDocumentError, msg=(field, position, value)):
                    parse_profile_document(json.dumps(document))

    def test_unknown_frame_reference(self):
        document = copy.deepcopy(self.document)
        document['profiles'][0]['events'][2]['frame'] = 42
        with self.assertRaises(UnknownFrameReferenceError):
            import_profile_group(document)

    def test_invalid_json_text(self):
        with self.assertRaises(InvalidDocumentError):
            parse_profile_document('{"shared": ')

    def test_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            parse_profile_document('not json')


class TestLoadDocument(unittest.TestCase):
    """测试文件读取"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        profile, _ = build_nested_profile()
        self.document = export_profile_group(ProfileGroup(name='Test Profile', profiles=[profile]))

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_load_json(self):
        path = save_document(self.document, os.path.join(self.temp_dir, 'nested', 'profile.json'))
        self.assertEqual(load_document(path), self.document)
        self.assertEqual(load_profile_group(path).name, 'Test Profile')

    def test_load_gzip(self):
        path = os.path.join(self.temp_dir, 'profile.json.gz')
        with gzip.open(path, 'wt', encoding='utf-8') as f:
            f.write(dumps_document(self.document))
        self.assertEqual(load_document(path), self.document)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_document(os.path.join(self.temp_dir, 'missing.json'))

    def test_invalid_json_file(self):
        path = os.path.join(self.temp_dir, 'broken.json')
        with open(path, 'w', encoding='utf-8') as f:
            f.write('{')
        with self.assertRaises(InvalidDocumentError):
            load_document(path)

    def test_saved_text_is_canonical(self):
        path = save_document(self.document, os.path.join(self.temp_dir, 'profile.json'))
        with open(path, encoding='utf-8') as f:
            self.assertEqual(f.read(), json.dumps(self.document, indent=2, ensure_ascii=False))


if __name__ == '__main__':
    unittest.main()
