from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase
from unittest.mock import patch

from modpublisher.util import content_type, first_non_blank, is_blank, log, log_error, log_heading, log_sub_heading, log_warn, \
    resolve_file, resolve_string, version_below


class LoggingTests(TestCase):

    @staticmethod
    def test_logging():
        log('Uploading things', log_heading)
        log('Uploading to somewhere', log_sub_heading)
        log('This is an informative message')
        log('Something happened, but the application may continue running', log_warn)
        log('A critical error occurred!', log_error)


class BlankTests(TestCase):

    def test__is_blank(self):
        self.assertTrue(is_blank(None))
        self.assertTrue(is_blank(''))
        self.assertTrue(is_blank(' \t\n'))
        self.assertFalse(is_blank(' x '))


    def test__first_non_blank(self):
        self.assertEqual(first_non_blank(None, '  ', 'My Mod', '1.0.0'), 'My Mod')
        self.assertEqual(first_non_blank('', None, default='1.0.0'), '1.0.0')
        self.assertIsNone(first_non_blank(None, ''))


class ResolveStringTests(TestCase):

    def setUp(self):
        self.directory = TemporaryDirectory()
        self.base = Path(self.directory.name)
        (self.base / 'CHANGELOG.md').write_text('- Fixed a crash\n', encoding='utf-8')


    def tearDown(self):
        self.directory.cleanup()


    def test__literal(self):
        self.assertEqual(resolve_string('Fixed things', self.base), 'Fixed things')
        self.assertEqual(resolve_string('line one\nline two', self.base), 'line one\nline two')


    def test__none_is_empty(self):
        self.assertEqual(resolve_string(None, self.base), '')


    def test__file_name(self):
        self.assertEqual(resolve_string('CHANGELOG.md', self.base), '- Fixed a crash\n')
        self.assertEqual(resolve_string(str(self.base / 'CHANGELOG.md')), '- Fixed a crash\n')


    def test__path(self):
        self.assertEqual(resolve_string(Path('CHANGELOG.md'), self.base), '- Fixed a crash\n')


    def test__missing_path_raises(self):
        with self.assertRaises(FileNotFoundError):
            resolve_string(Path('MISSING.md'), self.base)


    def test__unreadable_file_falls_back_with_warning(self):
        with patch('modpublisher.util._misc.Path.read_text', side_effect=PermissionError('Permission denied')), \
                patch('modpublisher.util._misc.log') as log_mock:
            self.assertEqual(resolve_string('CHANGELOG.md', self.base), 'CHANGELOG.md')

        message, level = log_mock.call_args.args
        self.assertEqual(level, log_warn)
        self.assertIn(str(self.base / 'CHANGELOG.md'), message)


    def test__undecodable_file_falls_back_with_warning(self):
        (self.base / 'CHANGELOG.bin').write_bytes(b'\xff\xfe\xfa')

        with patch('modpublisher.util._misc.log') as log_mock:
            self.assertEqual(resolve_string('CHANGELOG.bin', self.base), 'CHANGELOG.bin')

        self.assertEqual(log_mock.call_args.args[1], log_warn)


    def test__callable(self):
        self.assertEqual(resolve_string(lambda: 'Generated', self.base), 'Generated')
        self.assertEqual(resolve_string(lambda: Path('CHANGELOG.md'), self.base), '- Fixed a crash\n')


class ResolveFileTests(TestCase):

    def test__relative_to_base(self):
        base = Path('/srv/project')
        self.assertEqual(resolve_file('build/libs/mod.jar', base), (base / 'build/libs/mod.jar').resolve())


    def test__absolute_kept(self):
        self.assertEqual(resolve_file('/tmp/mod.jar', Path('/srv/project')), Path('/tmp/mod.jar').resolve())


    def test__callable(self):
        base = Path('/srv/project')
        self.assertEqual(resolve_file(lambda: Path('mod.jar'), base), (base / 'mod.jar').resolve())


    def test__empty(self):
        self.assertIsNone(resolve_file(None))
        self.assertIsNone(resolve_file('  '))
        self.assertIsNone(resolve_file(lambda: None))


class ContentTypeTests(TestCase):

    def test__content_type(self):
        self.assertEqual(content_type(Path('build/libs/example-1.0.0.jar')), 'application/java-archive')
        self.assertEqual(content_type(Path('build/libs/EXAMPLE.JAR')), 'application/java-archive')
        self.assertEqual(content_type(Path('build/example-resources.zip')), 'application/zip')
        self.assertEqual(content_type(Path('build/example.mcnotes')), 'application/octet-stream')


class GameVersionTests(TestCase):

    def test__version_below(self):
        for version, expected in (('b1.7.3', True), ('a1.2.6', True), ('rd-132211', True), ('0.9', True),
                                  ('1.0', False), ('1.0.0', False), ('1.2.5', False), ('1.20.1', False),
                                  ('1.21-pre3', False), ('24w14a', False)):
            with self.subTest(version=version):
                self.assertEqual(version_below(version, '1.0'), expected)
