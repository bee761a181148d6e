"""Project and its publishing configuration"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Optional

from modpublisher import config as cfg
from modpublisher.util import is_blank, log, log_heading, log_error
from ._config import AdditionalFile, ApiKeys, Dependencies, GithubConfig, PublishConfig
from ._enums import CurseEnvironment, ModLoader, Platform, ReleaseType
from ._errors import ConfigurationError


_UNSET = object()


class Project(ABC):
    """
    A project published by modpublisher. Build scripts subclass this and
    describe the release in publishing(), using the DSL methods below.
    The DSL methods only record values; build_config() validates them
    all at once and produces an immutable PublishConfig.
    """


    def __init__(self):
        self.__api_keys: dict[str, str] = {'curseforge': '', 'modrinth': '', 'github': ''}
        self.__curseforge_id: Optional[str] = None
        self.__modrinth_id: Optional[str] = None
        self.__github_repo: Optional[str] = None
        self.__release_type: Any = ReleaseType.RELEASE
        self.__changelog: Any = None
        self.__project_version: Optional[str] = None
        self.__display_name: Optional[str] = None
        self.__game_versions: list[str] = []
        self.__loaders: list[Any] = []
        self.__java_versions: list[Any] = []
        self.__curse_environment: Any = CurseEnvironment.BOTH
        self.__artifact: Any = None
        self.__platform_artifacts: dict[Platform, Any] = { }
        self.__github_options: dict[str, Any] = { }
        self.__curseforge_depends: dict[str, list[str]] = {kind: [] for kind in _DEPENDENCY_KINDS}
        self.__modrinth_depends: dict[str, list[str]] = {kind: [] for kind in _DEPENDENCY_KINDS}
        self.__additional_files: list[AdditionalFile] = []
        self.__debug: bool = False
        self.__disable_empty_jar_check: bool = False
        self.__use_modrinth_staging: bool = False

        self.__successful: bool = True
        self.__config: Optional[PublishConfig] = None

        self.__completed: dict[Callable, list[bool | str]] = {
            self.publishing: [False, 'Configuring publishing']
        }


    # DSL


    def api_keys(self, *, curseforge: Optional[str] = None, modrinth: Optional[str] = None,
                 github: Optional[str] = None):
        """
        Set the API tokens. Never commit them, read them from
        the environment instead.

        :param curseforge: CurseForge API token
        :param modrinth: Modrinth personal access token
        :param github: GitHub token with 'contents: write' permission
        """

        for platform, key in (('curseforge', curseforge), ('modrinth', modrinth), ('github', github)):
            if key is not None:
                self.__api_keys[platform] = key


    def curseforge_id(self, project_id: str | int):
        """Set the numeric CurseForge project ID"""

        self.__curseforge_id = str(project_id)


    def modrinth_id(self, project_id: str):
        """Set the Modrinth project ID (not the slug)"""

        self.__modrinth_id = project_id


    def github_repo(self, repo: str):
        """
        Set the GitHub repository to release on

        :param repo: 'owner/name' or the repository URL
        """

        self.__github_repo = repo


    def release_type(self, release_type: str | ReleaseType):
        """
        Set the release type

        :param release_type: 'release', 'beta' or 'alpha' (any case)
        """

        self.__release_type = release_type


    def changelog(self, source: Any):
        """
        Set the changelog

        :param source: Literal text, a file path, or a callable returning either
        """

        self.__changelog = source


    def project_version(self, project_version: str):
        """
        Set the project version. Used as version number on Modrinth and
        as the default GitHub release tag.

        :param project_version: Any string
        """

        self.__project_version = project_version


    def display_name(self, display_name: str):
        """Set the user friendly name of the uploaded file"""

        self.__display_name = display_name


    def game_versions(self, *versions: str):
        """Add supported game versions, e.g. '1.20.1'"""

        self.__game_versions.extend(versions)


    def loaders(self, *loaders: str | ModLoader):
        """Add supported mod loaders, e.g. 'fabric' or ModLoader.FORGE"""

        self.__loaders.extend(loaders)


    def java_versions(self, *versions: int | str):
        """
        Add supported Java versions. Currently only used for CurseForge.

        :param versions: e.g. 8, '17' or 'Java 21'
        """

        self.__java_versions.extend(versions)


    def curse_environment(self, environment: str | CurseEnvironment):
        """
        Set the CurseForge environment tag

        :param environment: 'client', 'server' or 'both'
        """

        self.__curse_environment = environment


    def artifact(self, reference: Any):
        """
        Set the file to upload

        :param reference: A path, or a callable returning one (e.g. a build step's output)
        """

        self.__artifact = reference


    def platform_artifact(self, platform: str | Platform, reference: Any):
        """
        Upload a different file to one platform

        :param platform: 'curseforge', 'modrinth' or 'github'
        :param reference: A path, or a callable returning one
        :raise ConfigurationError: If the platform is unknown or already has an override
        """

        try:
            resolved_platform = Platform.parse(platform)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        if resolved_platform in self.__platform_artifacts:
            raise ConfigurationError(f'Artifact already added for platform {resolved_platform}')

        self.__platform_artifacts[resolved_platform] = reference


    def github(self, *, tag: Optional[str] = _UNSET, target: Optional[str] = _UNSET, repo: Optional[str] = _UNSET,
               draft: bool = _UNSET, create_tag: bool = _UNSET, create_release: bool = _UNSET,
               update_release: bool = _UNSET):
        """
        Configure GitHub Releases. Only the given options are changed.

        :param tag: Release tag. Defaults to the project version
        :param target: Commit-ish the tag is created from. Ignored if the release already exists
        :param repo: Overrides github_repo()
        :param draft: Keep new releases and existing drafts as drafts. Published releases are never re-drafted
        :param create_tag: Allow creating the tag if it doesn't exist
        :param create_release: Allow creating the release if it doesn't exist
        :param update_release: Allow adding files to an existing release
        """

        for name, value in (('tag', tag), ('target', target), ('repo', repo), ('draft', draft),
                            ('create_tag', create_tag), ('create_release', create_release),
                            ('update_release', update_release)):
            if value is not _UNSET:
                self.__github_options[name] = value


    def curseforge_depends(self, *, required: tuple[str, ...] = (), optional: tuple[str, ...] = (),
                           incompatible: tuple[str, ...] = (), embedded: tuple[str, ...] = ()):
        """Add CurseForge relations, given as project slugs"""

        _add_dependencies(self.__curseforge_depends, required, optional, incompatible, embedded)


    def modrinth_depends(self, *, required: tuple[str, ...] = (), optional: tuple[str, ...] = (),
                         incompatible: tuple[str, ...] = (), embedded: tuple[str, ...] = ()):
        """Add Modrinth dependencies, given as project slugs or IDs"""

        _add_dependencies(self.__modrinth_depends, required, optional, incompatible, embedded)


    def additional_file(self, reference: Any, *, display_name: Optional[str] = None,
                        changelog: Optional[str] = None):
        """
        Upload another file along with the main artifact

        :param reference: A path, or a callable returning one
        :param display_name: Optional. Display name of this file (CurseForge)
        :param changelog: Optional. Changelog of this file (CurseForge)
        """

        self.__additional_files.append(AdditionalFile(reference, display_name, changelog))


    def additional_files(self, *references: Any):
        """Upload several other files along with the main artifact"""

        for reference in references:
            self.additional_file(reference)


    def debug(self, enabled: bool = True):
        """In debug mode, nothing is created or uploaded. Intended requests are logged instead."""

        self.__debug = enabled


    def disable_empty_jar_check(self, disabled: bool = True):
        """Skip checking that the artifact contains classes or mod metadata"""

        self.__disable_empty_jar_check = disabled


    def use_modrinth_staging(self, enabled: bool = True):
        """Upload to the Modrinth staging server instead of production"""

        self.__use_modrinth_staging = enabled


    # Configuration assembly


    def build_config(self) -> PublishConfig:
        """
        Validate everything set through the DSL and freeze it. The result
        is cached, later DSL calls have no effect on it.

        :return: The publishing configuration
        :raise ConfigurationError: Listing every invalid value
        """

        if self.__config is not None:
            return self.__config

        errors: list[str] = []


        def parse(enum_type, value):
            try:
                return enum_type.parse(value)
            except ValueError as e:
                errors.append(str(e))
                return None


        if is_blank(self.__project_version):
            errors.append('No project version set')

        if self.__artifact is None:
            errors.append('No artifact set')

        release_type = parse(ReleaseType, self.__release_type)
        curse_environment = parse(CurseEnvironment, self.__curse_environment)
        loaders = [parse(ModLoader, loader) for loader in self.__loaders]
        java_versions = []

        for java_version in self.__java_versions:
            try:
                java_versions.append(_parse_java_version(java_version))
            except ValueError:
                errors.append(f"Invalid Java version '{java_version}'")

        if errors:
            for error in errors:
                log(error, log_error)
            raise ConfigurationError('Invalid publishing configuration: ' + '; '.join(errors))

        github_options = {'repo': self.__github_repo, **self.__github_options}

        self.__config = PublishConfig(
                project_version=self.__project_version,
                artifact=self.__artifact,
                api_keys=ApiKeys(**self.__api_keys),
                curseforge_id=self.__curseforge_id,
                modrinth_id=self.__modrinth_id,
                release_type=release_type,
                changelog=self.__changelog,
                display_name=self.__display_name,
                game_versions=tuple(dict.fromkeys(self.__game_versions)),
                loaders=tuple(dict.fromkeys(loaders)),
                java_versions=tuple(dict.fromkeys(java_versions)),
                curse_environment=curse_environment,
                platform_artifacts=MappingProxyType(dict(self.__platform_artifacts)),
                github=GithubConfig(**github_options),
                curseforge_depends=_freeze_dependencies(self.__curseforge_depends),
                modrinth_depends=_freeze_dependencies(self.__modrinth_depends),
                additional_files=tuple(self.__additional_files),
                debug=self.__debug,
                disable_empty_jar_check=self.__disable_empty_jar_check,
                use_modrinth_staging=self.__use_modrinth_staging,
                base_directory=cfg.global_options.script_directory
        )

        return self.__config


    # Build state


    def fail(self):
        """Mark this project's run as failed"""

        self.__successful = False


    def has_failed(self) -> bool:
        """
        Check whether this project's run is successful so far

        :return: Whether the run has failed
        """

        return not self.__successful


    def ensure_completed(self, function: Callable):
        """Ensure that a project function has been executed"""

        if self.has_failed():
            return

        if not function in self.__completed:
            log(f"Unknown state '{str(function)}'", log_error)
        else:
            state_data = self.__completed[function]
            if not state_data[0]:
                log(state_data[1], log_heading)
                function()
                state_data[0] = True


    @abstractmethod
    def publishing(self):
        """Called before any task runs. Describe the release here."""
        pass


_DEPENDENCY_KINDS = ('required', 'optional', 'incompatible', 'embedded')


def _add_dependencies(target: dict[str, list[str]], *kinds: tuple[str, ...]):
    for kind, slugs in zip(_DEPENDENCY_KINDS, kinds):
        # Accept a single string as well
        target[kind].extend([slugs] if isinstance(slugs, str) else slugs)


def _freeze_dependencies(source: dict[str, list[str]]) -> Dependencies:
    return Dependencies(**{kind: tuple(dict.fromkeys(source[kind])) for kind in _DEPENDENCY_KINDS})


def _parse_java_version(version: int | str) -> int:
    """
    Turn 8, '8', '1.8' or 'Java 8' into 8

    :raise ValueError: If the version can't be parsed
    """

    if isinstance(version, int):
        return version

    text = str(version).strip()
    if text.lower().startswith('java '):
        text = text[5:].strip()
    if text.startswith('1.'):
        text = text[2:]

    return int(text)
