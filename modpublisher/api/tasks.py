"""Project tasks"""

from typing import Callable

from modpublisher.util import ansi, log, log_heading
from . import _project as p
from ._config import PublishConfig
from ._curseforge import curseforge_upload
from ._enums import Platform
from ._github import github_upload
from ._modrinth import modrinth_upload


def _configured(project: p.Project) -> PublishConfig | None:
    project.ensure_completed(project.publishing)

    if project.has_failed():
        return None

    return project.build_config()


def config(project: p.Project):
    """Print out the publishing configuration"""

    publish_config = _configured(project)
    if publish_config is None:
        return

    def describe(value) -> str:
        if isinstance(value, tuple | list):
            return ', '.join(map(str, value))
        if callable(value):
            return f'{ansi.gray}<{getattr(value, "__name__", "callable")}>{ansi.reset}'
        return str(value)

    rows = {
        'project_version': publish_config.project_version,
        'display_name': publish_config.display_name,
        'release_type': publish_config.release_type,
        'artifact': publish_config.artifact,
        'game_versions': publish_config.game_versions,
        'loaders': publish_config.loaders,
        'java_versions': publish_config.java_versions,
        'curse_environment': publish_config.curse_environment,
        'curseforge_id': publish_config.curseforge_id,
        'modrinth_id': publish_config.modrinth_id,
        'github': publish_config.github,
        'github_tag': publish_config.github_tag,
        'api_keys': publish_config.api_keys,
        'additional_files': [additional.artifact for additional in publish_config.additional_files],
        'debug': publish_config.debug
    }

    log('Publishing configuration:' + ''.join(
            f"\n  {ansi.gray}'{name}'{ansi.reset} = {describe(value)}" for name, value in rows.items()
    ), log_heading)


def curseforge(project: p.Project):
    """Upload to CurseForge"""

    if (publish_config := _configured(project)) is not None:
        curseforge_upload(publish_config)


def modrinth(project: p.Project):
    """Upload to Modrinth"""

    if (publish_config := _configured(project)) is not None:
        modrinth_upload(publish_config)


def github(project: p.Project):
    """Upload to GitHub Releases"""

    if (publish_config := _configured(project)) is not None:
        github_upload(publish_config)


def publish(project: p.Project):
    """Upload to every platform that has an API key"""

    publish_config = _configured(project)
    if publish_config is None:
        return

    for platform, uploader in ((Platform.CURSEFORGE, curseforge_upload),
                               (Platform.MODRINTH, modrinth_upload),
                               (Platform.GITHUB, github_upload)):
        if publish_config.api_keys.for_platform(platform):
            uploader(publish_config)
        else:
            log(f'No API key for {platform}, skipping')


task_map: dict[str, Callable] = {
    'config': config,
    'curseforge': curseforge,
    'modrinth': modrinth,
    'github': github,
    'publish': publish
}
