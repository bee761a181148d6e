"""Modrinth publishing"""

import json
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import requests

from modpublisher import config as cfg
from modpublisher.util import ansi, content_type, first_non_blank, log, log_sub_heading, log_warn, new_session, \
    pretty_json, request_json, resolve_file, resolve_string
from ._checks import check_artifact, check_required_values
from ._config import Dependencies, PublishConfig
from ._enums import Platform
from ._errors import UploadError


DEPENDENCY_KINDS = ('required', 'optional', 'incompatible', 'embedded')


class ModrinthClient:
    """A small client for the Modrinth v2 API"""


    def __init__(self, token: str, *, staging: bool = False, session: Optional[requests.Session] = None):
        """
        :param token: A Modrinth personal access token
        :param staging: Whether to talk to the staging server
        :param session: Optional. Session to send requests with
        """

        self.base_url = (cfg.global_options.modrinth_staging_api_url if staging
                         else cfg.global_options.modrinth_api_url).rstrip('/')
        self.session = session or new_session()
        self.session.headers['Authorization'] = token


    def project_id(self, id_or_slug: str) -> str:
        """
        Look up a project's ID

        :param id_or_slug: The project's ID or slug
        :return: The project ID
        :raise requests.HTTPError: If there is no such project
        """

        return request_json(self.session, 'GET', f'{self.base_url}/project/{id_or_slug}')['id']


    def create_version(self, data: dict, files: list[Path]) -> dict:
        """
        Create a version with files. The first file is the primary one.

        :param data: Version data, see the Modrinth API. 'file_parts' is filled in here
        :param files: The files to attach
        :return: The created version
        :raise UploadError: If Modrinth didn't return the new version
        :raise requests.HTTPError: If the version was rejected
        """

        part_names = [_part_name(i) for i in range(len(files))]
        data = {**data, 'file_parts': part_names, 'primary_file': part_names[0]}

        with ExitStack() as stack:
            multipart = {'data': (None, json.dumps(data), 'application/json')}
            for part_name, file in zip(part_names, files):
                multipart[part_name] = (file.name, stack.enter_context(file.open('rb')), content_type(file))

            version = request_json(self.session, 'POST', f'{self.base_url}/version', files=multipart)

        if not isinstance(version, dict) or 'id' not in version:
            raise UploadError(f"Modrinth did not return the created version for '{files[0].name}'")

        return version


def _part_name(index: int) -> str:
    return 'file' if index == 0 else f'file_{index}'


def dependency_list(dependencies: Dependencies, resolve_id=None) -> list[dict[str, str]]:
    """
    Turn dependencies into Modrinth version dependencies

    :param dependencies: Slugs or IDs of the related projects
    :param resolve_id: Optional. Maps a slug or ID to a project ID
    :return: The dependency list
    """

    return [{'project_id': resolve_id(slug) if resolve_id is not None else slug, 'dependency_type': kind}
            for kind in DEPENDENCY_KINDS
            for slug in getattr(dependencies, kind)]


def build_version_data(config: PublishConfig, dependencies: list[dict[str, str]]) -> dict:
    return {
        'name': first_non_blank(config.display_name, default=config.project_version),
        'version_number': config.project_version,
        'changelog': resolve_string(config.changelog, config.base_directory),
        'dependencies': dependencies,
        'game_versions': list(config.game_versions),
        'version_type': config.release_type.value,
        'loaders': [loader.value for loader in config.loaders],
        'featured': False,
        'project_id': config.modrinth_id
    }


def modrinth_upload(config: PublishConfig, client: Optional[ModrinthClient] = None) -> Optional[dict]:
    """
    Create a Modrinth version holding the artifact and any additional files

    :param config: The publishing configuration
    :param client: Optional. The client to use
    :return: The created version, or None if nothing was uploaded
    :raise FileNotFoundError: If a file to upload doesn't exist
    """

    log(f'Uploading to {ansi.platform_color("modrinth")}Modrinth'
        + (' (staging)' if config.use_modrinth_staging else ''), log_sub_heading)

    required = check_required_values(config, Platform.MODRINTH)
    if not required:
        log(f"Missing required value '{required.missing}' for Modrinth, skipping", log_warn)
        return None

    artifact = config.artifact_for(Platform.MODRINTH)
    upload_file = resolve_file(artifact, config.base_directory)
    if upload_file is None or not upload_file.exists():
        raise FileNotFoundError(f'Cannot find file {upload_file or artifact}')

    artifact_check = check_artifact(upload_file, config)
    if not artifact_check:
        log(f'Not uploading to Modrinth: {artifact_check.missing}', log_warn)
        return None

    files = [upload_file]
    for additional in config.additional_files:
        additional_path = resolve_file(additional.artifact, config.base_directory)
        if additional_path is None or not additional_path.exists():
            raise FileNotFoundError(f'Cannot find file {additional_path or additional.artifact}')
        files.append(additional_path)

    # Only log what would be sent in debug mode
    if config.debug:
        log('Debug mode is enabled. Not uploading to Modrinth')
        log(f"Would upload {', '.join(repr(file.name) for file in files)} to Modrinth project "
            f"{config.modrinth_id}:\n"
            + pretty_json(build_version_data(config, dependency_list(config.modrinth_depends))))
        return None

    client = client or ModrinthClient(config.api_keys.modrinth, staging=config.use_modrinth_staging)

    version = client.create_version(
            build_version_data(config, dependency_list(config.modrinth_depends, client.project_id)),
            files
    )

    log(f"Successfully uploaded version {config.project_version} to Modrinth project {config.modrinth_id} "
        f"(version {version['id']})")
    return version
