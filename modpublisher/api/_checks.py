"""Checks that run before anything is uploaded"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from zipfile import BadZipFile, ZipFile, is_zipfile

from modpublisher.util import any_match, is_blank
from ._config import PublishConfig
from ._enums import Platform


# Files that identify a jar as a mod, plugin or pack even without classes
CONTENT_MARKERS = (
    'fabric.mod.json',
    'quilt.mod.json',
    'META-INF/mods.toml',
    'META-INF/neoforge.mods.toml',
    'mcmod.info',
    'plugin.yml',
    'paper-plugin.yml',
    'velocity-plugin.json',
    'bungee.yml',
    'pack.mcmeta'
)


@dataclass(frozen=True)
class CheckResult:
    passed: bool
    # The missing field or the reason the check failed
    missing: Optional[str] = None


    def __bool__(self):
        return self.passed


_PASSED = CheckResult(True)


def check_required_values(config: PublishConfig, platform: Platform) -> CheckResult:
    """
    Check that every value a platform needs is configured. No network
    access happens here.

    :param config: The publishing configuration
    :param platform: The platform about to be uploaded to
    :return: The result, naming the first missing field on failure
    """

    required: list[tuple[str, object]] = [
        ('project_version', config.project_version),
        ('artifact', config.artifact_for(platform)),
        ('changelog', config.changelog)
    ]

    if platform in (Platform.CURSEFORGE, Platform.MODRINTH):
        required += [
            ('game_versions', config.game_versions),
            ('loaders', config.loaders)
        ]

    if platform == Platform.CURSEFORGE:
        required += [
            ('api_keys.curseforge', config.api_keys.curseforge),
            ('curseforge_id', config.curseforge_id)
        ]
    elif platform == Platform.MODRINTH:
        required += [
            ('api_keys.modrinth', config.api_keys.modrinth),
            ('modrinth_id', config.modrinth_id)
        ]
    else:
        required += [
            ('api_keys.github', config.api_keys.github),
            ('github.repo', config.github.repo),
            ('github.tag', config.github_tag)
        ]

    for name, value in required:
        if _is_missing(value):
            return CheckResult(False, name)

    return _PASSED


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return is_blank(value)
    if isinstance(value, (tuple, list)):
        return len(value) == 0
    return False


def check_artifact(file: Path, config: PublishConfig) -> CheckResult:
    """
    Check that a resolved artifact is worth uploading: it must be a
    non-empty file, and a jar must contain classes or a known mod
    metadata file, unless the empty jar check is disabled.

    :param file: The resolved artifact
    :param config: The publishing configuration
    :return: The result, with the reason on failure
    """

    if not file.is_file():
        return CheckResult(False, f"'{file}' is not a file")

    if file.stat().st_size == 0:
        return CheckResult(False, f"'{file}' is empty")

    if config.disable_empty_jar_check or not is_zipfile(file):
        return _PASSED

    try:
        with ZipFile(file) as archive:
            entries = [entry.filename for entry in archive.infolist() if not entry.is_dir()]
    except BadZipFile:
        return CheckResult(False, f"'{file}' is not a readable archive")

    if not entries:
        return CheckResult(False, f"'{file}' contains no files")

    if not (any_match(entries, lambda name: name.endswith('.class'))
            or any_match(entries, lambda name: name in CONTENT_MARKERS)):
        return CheckResult(False, f"'{file}' contains neither classes nor mod metadata")

    return _PASSED
