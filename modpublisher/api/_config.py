"""Immutable publishing configuration"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from ._enums import CurseEnvironment, ModLoader, Platform, ReleaseType


@dataclass(frozen=True)
class ApiKeys:
    curseforge: str = ''
    modrinth: str = ''
    github: str = ''


    def for_platform(self, platform: Platform) -> str:
        return getattr(self, platform.value)


    def __repr__(self):
        # Never print tokens
        masked = [f"{name}='***'" if getattr(self, name) else f"{name}=''"
                  for name in ('curseforge', 'modrinth', 'github')]
        return f"ApiKeys({', '.join(masked)})"


@dataclass(frozen=True)
class Dependencies:
    """Project identifiers (slugs or IDs) of related projects on a platform"""

    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    incompatible: tuple[str, ...] = ()
    embedded: tuple[str, ...] = ()


    def is_empty(self) -> bool:
        return not (self.required or self.optional or self.incompatible or self.embedded)


@dataclass(frozen=True)
class AdditionalFile:
    """A file uploaded alongside the main artifact"""

    artifact: Any
    display_name: Optional[str] = None
    changelog: Optional[str] = None


@dataclass(frozen=True)
class GithubConfig:
    """GitHub Releases options"""

    # Release tag. Defaults to the project version
    tag: Optional[str] = None
    # Commit-ish the new tag points at. Only used when a release is created
    target: Optional[str] = None
    # 'owner/name' or a repository URL
    repo: Optional[str] = None
    # Whether new releases and existing drafts stay drafts. Published releases are never turned into drafts
    draft: bool = False
    create_tag: bool = True
    create_release: bool = True
    update_release: bool = True


@dataclass(frozen=True)
class PublishConfig:
    """
    A read-only snapshot of a project's publishing configuration.
    Assembled and validated once by Project.build_config(), then
    passed to every upload task.
    """

    project_version: str
    artifact: Any
    api_keys: ApiKeys = field(default_factory=ApiKeys)
    curseforge_id: Optional[str] = None
    modrinth_id: Optional[str] = None
    release_type: ReleaseType = ReleaseType.RELEASE
    changelog: Any = None
    display_name: Optional[str] = None
    game_versions: tuple[str, ...] = ()
    loaders: tuple[ModLoader, ...] = ()
    java_versions: tuple[int, ...] = ()
    curse_environment: CurseEnvironment = CurseEnvironment.BOTH
    platform_artifacts: Mapping[Platform, Any] = field(default_factory=dict)
    github: GithubConfig = field(default_factory=GithubConfig)
    curseforge_depends: Dependencies = field(default_factory=Dependencies)
    modrinth_depends: Dependencies = field(default_factory=Dependencies)
    additional_files: tuple[AdditionalFile, ...] = ()
    debug: bool = False
    disable_empty_jar_check: bool = False
    use_modrinth_staging: bool = False
    base_directory: Optional[Path] = None


    def artifact_for(self, platform: Platform) -> Any:
        """
        Get the artifact reference to upload to a platform

        :param platform: The platform
        :return: The platform specific override, if any, otherwise the main artifact
        """

        return self.platform_artifacts.get(platform, self.artifact)


    @property
    def github_tag(self) -> Optional[str]:
        """The GitHub release tag, defaulting to the project version"""

        return self.github.tag or self.project_version
