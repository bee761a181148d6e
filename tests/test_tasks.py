from os import chdir, getcwd
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase
from unittest.mock import patch

import requests

from modpublisher import config as cfg, main
from modpublisher.api import ConfigurationError, Project, UploadError, tasks


class ExampleProject(Project):

    keys = {'curseforge': 'cf-token', 'github': 'gh-token'}


    def publishing(self):
        self.api_keys(**self.keys)
        self.project_version('1.0.0')
        self.artifact('build/libs/example-1.0.0.jar')


class BrokenProject(Project):

    def publishing(self):
        self.project_version('1.0.0')
        self.release_type('nightly')
        self.artifact('build/libs/example-1.0.0.jar')


def patch_uploaders():
    return (patch('modpublisher.api.tasks.curseforge_upload'),
            patch('modpublisher.api.tasks.modrinth_upload'),
            patch('modpublisher.api.tasks.github_upload'))


class TaskTests(TestCase):

    def setUp(self):
        cfg.reset()


    def test__publish_only_uses_platforms_with_keys(self):
        curseforge_patch, modrinth_patch, github_patch = patch_uploaders()
        project = ExampleProject()

        with curseforge_patch as curseforge, modrinth_patch as modrinth, github_patch as github:
            tasks.publish(project)

        curseforge.assert_called_once_with(project.build_config())
        modrinth.assert_not_called()
        github.assert_called_once_with(project.build_config())


    def test__single_platform_task(self):
        curseforge_patch, modrinth_patch, github_patch = patch_uploaders()
        project = ExampleProject()

        with curseforge_patch as curseforge, modrinth_patch as modrinth, github_patch as github:
            tasks.modrinth(project)

        # Missing keys are reported by the uploader itself
        modrinth.assert_called_once()
        curseforge.assert_not_called()
        github.assert_not_called()


    def test__publishing_is_configured_once(self):
        calls = []

        class CountingProject(ExampleProject):
            def publishing(self):
                calls.append(1)
                super().publishing()

        project = CountingProject()

        with patch('modpublisher.api.tasks.github_upload') as github:
            tasks.github(project)
            tasks.github(project)

        self.assertEqual(len(calls), 1)
        self.assertEqual(github.call_count, 2)


    def test__config(self):
        tasks.config(ExampleProject())


    def test__invalid_config_raises(self):
        with self.assertRaises(ConfigurationError):
            tasks.publish(BrokenProject())


    def test__task_map(self):
        self.assertEqual(set(tasks.task_map), {'config', 'curseforge', 'modrinth', 'github', 'publish'})


class MainTests(TestCase):

    def setUp(self):
        cfg.reset()
        self.cwd = getcwd()
        self.directory = TemporaryDirectory()
        self.script = str(Path(self.directory.name) / 'publish.py')


    def tearDown(self):
        chdir(self.cwd)
        self.directory.cleanup()
        cfg.reset()


    def test__help(self):
        for args in ([], ['help'], ['unknown-task']):
            with self.subTest(args=args):
                with self.assertRaises(SystemExit) as context:
                    main(ExampleProject, self.script, args)

                self.assertFalse(context.exception.code)


    def test__script_directory(self):
        with patch('modpublisher.api.tasks.task_map', {'config': lambda project: None}):
            main(ExampleProject, self.script, ['config'])

        self.assertEqual(cfg.global_options.script_directory, Path(self.directory.name).resolve())


    def test__successful_run(self):
        curseforge_patch, modrinth_patch, github_patch = patch_uploaders()

        with curseforge_patch as curseforge, modrinth_patch, github_patch:
            main(ExampleProject, self.script, ['curseforge'])

        curseforge.assert_called_once()


    def test__failed_task_exits_with_error(self):
        for error in (UploadError('Upload failed'), FileNotFoundError('Cannot find file mod.jar'),
                      requests.HTTPError('400 Client Error')):
            with self.subTest(error=type(error).__name__):
                with patch('modpublisher.api.tasks.github_upload', side_effect=error):
                    with self.assertRaises(SystemExit) as context:
                        main(ExampleProject, self.script, ['github'])

                self.assertEqual(context.exception.code, 1)


    def test__invalid_config_exits_with_error(self):
        with self.assertRaises(SystemExit) as context:
            main(BrokenProject, self.script, ['config'])

        self.assertEqual(context.exception.code, 1)


    def test__later_tasks_skipped_after_failure(self):
        curseforge_patch, modrinth_patch, github_patch = patch_uploaders()

        with curseforge_patch as curseforge, modrinth_patch, github_patch as github:
            github.side_effect = UploadError('Upload failed')

            with self.assertRaises(SystemExit):
                main(ExampleProject, self.script, ['github', 'curseforge'])

        curseforge.assert_not_called()
