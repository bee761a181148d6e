"""Shared test fixtures"""

from dataclasses import replace
from pathlib import Path
from zipfile import ZipFile

from modpublisher.api import ApiKeys, GithubConfig, ModLoader, PublishConfig, ReleaseType


def write_jar(path: Path, entries: dict[str, bytes] | None = None) -> Path:
    """Write a jar containing the given entries (a single class file by default)"""

    if entries is None:
        entries = {'com/example/ExampleMod.class': b'\xca\xfe\xba\xbe'}

    with ZipFile(path, 'w') as jar:
        for name, data in entries.items():
            jar.writestr(name, data)

    return path


def make_config(artifact: Path | str = 'build/libs/example-1.0.0.jar', **overrides) -> PublishConfig:
    """A complete configuration for every platform; overrides replace single fields"""

    config = PublishConfig(
            project_version='1.0.0',
            artifact=artifact,
            api_keys=ApiKeys(curseforge='cf-token', modrinth='mr-token', github='gh-token'),
            curseforge_id='123456',
            modrinth_id='AABBCCDD',
            release_type=ReleaseType.RELEASE,
            changelog='Fixed things',
            game_versions=('1.20.1',),
            loaders=(ModLoader.FABRIC,),
            github=GithubConfig(repo='example/example-mod', tag='v1.0.0')
    )

    return replace(config, **overrides)


def with_github(config: PublishConfig, **options) -> PublishConfig:
    """Replace GitHub options of a configuration"""

    return replace(config, github=replace(config.github, **options))
