"""CurseForge publishing"""

import json
from pathlib import Path
from typing import Any, Optional

import requests

from modpublisher import config as cfg
from modpublisher.util import ansi, content_type, is_blank, log, log_sub_heading, log_warn, new_session, \
    pretty_json, request_json, resolve_file, resolve_string, version_below
from ._checks import check_artifact, check_required_values
from ._config import Dependencies, PublishConfig
from ._enums import CurseEnvironment, ModLoader, Platform
from ._errors import ConfigurationError, UploadError


# CurseForge doesn't know game versions older than this
MIN_GAME_VERSION = '1.0'

RELATION_TYPES = {
    'required': 'requiredDependency',
    'optional': 'optionalDependency',
    'incompatible': 'incompatible',
    'embedded': 'embeddedLibrary'
}


class CurseForgeClient:
    """A small client for the CurseForge upload API"""


    def __init__(self, token: str, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        """
        :param token: The CurseForge API token
        :param base_url: Defaults to the Minecraft upload API
        :param session: Optional. Session to send requests with
        """

        self.base_url = (base_url or cfg.global_options.curseforge_api_url).rstrip('/')
        self.session = session or new_session()
        self.session.headers['X-Api-Token'] = token
        self.__version_ids: Optional[dict[str, dict[str, int]]] = None


    def __version_index(self) -> dict[str, dict[str, int]]:
        """
        Map lower case version names to IDs, grouped by category
        ('minecraft', 'modloader', 'environment', 'java'). Fetched
        once per client.
        """

        if self.__version_ids is None:
            version_types: list[dict] = request_json(self.session, 'GET', f'{self.base_url}/game/version-types')
            versions: list[dict] = request_json(self.session, 'GET', f'{self.base_url}/game/versions')

            type_categories: dict[int, str] = { }
            for version_type in version_types:
                slug: str = version_type.get('slug', '')
                for category in ('minecraft', 'modloader', 'environment', 'java'):
                    if slug.startswith(category):
                        type_categories[version_type['id']] = category

            self.__version_ids = {'minecraft': { }, 'modloader': { }, 'environment': { }, 'java': { }}
            for version in versions:
                category = type_categories.get(version.get('gameVersionTypeID'))
                if category is not None:
                    # Several Minecraft version types may contain the same name; the first one wins
                    self.__version_ids[category].setdefault(version['name'].lower(), version['id'])

        return self.__version_ids


    def version_ids(self, category: str, names: list[str]) -> list[int]:
        """
        Look up the IDs of game version tags

        :param category: 'minecraft', 'modloader', 'environment' or 'java'
        :param names: Tag names, matched case-insensitively
        :return: The IDs, in the same order
        :raise ConfigurationError: If a name is unknown to CurseForge
        """

        known = self.__version_index()[category]
        unknown = [name for name in names if name.lower() not in known]

        if unknown:
            raise ConfigurationError(f"Unknown CurseForge {category} version(s): {', '.join(unknown)}")

        return [known[name.lower()] for name in names]


    def upload_file(self, project_id: str, metadata: dict, file: Path) -> int:
        """
        Upload a file to a project

        :param project_id: The numeric project ID
        :param metadata: The upload metadata, see the CurseForge upload API
        :param file: The file to upload
        :return: The ID of the new file
        :raise UploadError: If CurseForge didn't return a file ID
        :raise requests.HTTPError: If the upload was rejected
        """

        with file.open('rb') as file_stream:
            response = request_json(self.session, 'POST', f'{self.base_url}/projects/{project_id}/upload-file',
                                    data={'metadata': json.dumps(metadata)},
                                    files={'file': (file.name, file_stream, content_type(file))})

        if not isinstance(response, dict) or response.get('id') is None:
            raise UploadError(f"CurseForge did not return a file ID for '{file.name}'")

        return response['id']


def curseforge_tags(config: PublishConfig) -> tuple[list[str], list[str]]:
    """
    Compute the game version and mod loader tag names to send. Game
    versions older than 1.0 are sent as 1.0, and in that case no mod
    loader is sent at all. The 'modloader' loader is sent as 'forge'.

    :param config: The publishing configuration
    :return: Game version names and loader names, without duplicates
    """

    game_versions: list[str] = []
    old_version = False

    for game_version in config.game_versions:
        if version_below(game_version, MIN_GAME_VERSION):
            old_version = True
            game_versions.append(MIN_GAME_VERSION)
        else:
            game_versions.append(game_version)

    loaders: list[str] = []
    if not old_version:
        for loader in config.loaders:
            loaders.append(ModLoader.FORGE.value if loader == ModLoader.MODLOADER else loader.value)

    return list(dict.fromkeys(game_versions)), list(dict.fromkeys(loaders))


def environment_tags(environment: CurseEnvironment) -> list[str]:
    if environment == CurseEnvironment.CLIENT:
        return ['Client']
    if environment == CurseEnvironment.SERVER:
        return ['Server']
    return ['Client', 'Server']


def relations(dependencies: Dependencies) -> list[dict[str, str]]:
    """Turn dependencies into CurseForge project relations"""

    return [{'slug': slug, 'type': relation_type}
            for kind, relation_type in RELATION_TYPES.items()
            for slug in getattr(dependencies, kind)]


def build_metadata(config: PublishConfig, game_version_ids: list[Any]) -> dict:
    """
    Build the metadata of the main file

    :param config: The publishing configuration
    :param game_version_ids: IDs of all game version tags (versions, loaders, environments, Java)
    :return: The metadata
    """

    metadata = {
        'changelog': resolve_string(config.changelog, config.base_directory),
        'changelogType': 'markdown',
        'displayName': config.project_version if is_blank(config.display_name) else config.display_name,
        'gameVersions': game_version_ids,
        'releaseType': config.release_type.value
    }

    project_relations = relations(config.curseforge_depends)
    if project_relations:
        metadata['relations'] = {'projects': project_relations}

    return metadata


def _tag_names(config: PublishConfig) -> dict[str, list[str]]:
    game_versions, loaders = curseforge_tags(config)

    return {
        'minecraft': game_versions,
        'modloader': loaders,
        'environment': environment_tags(config.curse_environment),
        'java': [f'Java {java_version}' for java_version in config.java_versions]
    }


def curseforge_upload(config: PublishConfig, client: Optional[CurseForgeClient] = None) -> Optional[list[int]]:
    """
    Upload the artifact, and any additional files as its children, to CurseForge

    :param config: The publishing configuration
    :param client: Optional. The client to use
    :return: IDs of the uploaded files, or None if nothing was uploaded
    :raise FileNotFoundError: If a file to upload doesn't exist
    """

    log(f'Uploading to {ansi.platform_color("curseforge")}CurseForge', log_sub_heading)

    required = check_required_values(config, Platform.CURSEFORGE)
    if not required:
        log(f"Missing required value '{required.missing}' for CurseForge, skipping", log_warn)
        return None

    artifact = config.artifact_for(Platform.CURSEFORGE)
    upload_file = resolve_file(artifact, config.base_directory)
    if upload_file is None or not upload_file.exists():
        raise FileNotFoundError(f'Cannot find file {upload_file or artifact}')

    artifact_check = check_artifact(upload_file, config)
    if not artifact_check:
        log(f'Not uploading to CurseForge: {artifact_check.missing}', log_warn)
        return None

    additional_files: list[tuple[Path, dict]] = []
    for additional in config.additional_files:
        additional_path = resolve_file(additional.artifact, config.base_directory)
        if additional_path is None or not additional_path.exists():
            raise FileNotFoundError(f'Cannot find file {additional_path or additional.artifact}')

        additional_metadata = {
            'changelog': (resolve_string(additional.changelog, config.base_directory)
                          if additional.changelog is not None
                          else resolve_string(config.changelog, config.base_directory)),
            'changelogType': 'markdown',
            'releaseType': config.release_type.value
        }
        if not is_blank(additional.display_name):
            additional_metadata['displayName'] = additional.display_name

        additional_files.append((additional_path, additional_metadata))

    tag_names = _tag_names(config)

    # Only log what would be sent in debug mode
    if config.debug:
        log('Debug mode is enabled. Not uploading to CurseForge')
        log(f"Would upload '{upload_file.name}' to CurseForge project {config.curseforge_id}:\n"
            + pretty_json(build_metadata(config, [name for names in tag_names.values() for name in names])))
        for additional_path, additional_metadata in additional_files:
            log(f"Would upload additional file '{additional_path.name}':\n{pretty_json(additional_metadata)}")
        return None

    client = client or CurseForgeClient(config.api_keys.curseforge)

    game_version_ids: list[int] = []
    for category, names in tag_names.items():
        game_version_ids += client.version_ids(category, names)

    file_id = client.upload_file(config.curseforge_id, build_metadata(config, game_version_ids), upload_file)
    log(f"Uploaded '{upload_file.name}' to CurseForge as file {file_id}")
    uploaded = [file_id]

    for additional_path, additional_metadata in additional_files:
        child_id = client.upload_file(config.curseforge_id, {**additional_metadata, 'parentFileID': file_id},
                                      additional_path)
        log(f"Uploaded additional file '{additional_path.name}' to CurseForge as file {child_id}")
        uploaded.append(child_id)

    log(f'Successfully uploaded version {config.project_version} to CurseForge project {config.curseforge_id}')
    return uploaded
