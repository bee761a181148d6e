"""GitHub Releases publishing"""

from pathlib import Path
from re import fullmatch
from typing import Optional, Sequence

from github import Auth, Github, GithubException, UnknownObjectException
from github.GitRelease import GitRelease
from github.Repository import Repository

from modpublisher import config as cfg
from modpublisher.util import ansi, first_non_blank, log, log_sub_heading, log_warn, resolve_file, resolve_string
from ._checks import check_artifact, check_required_values
from ._config import PublishConfig
from ._enums import Platform
from ._errors import UploadError


ASSET_CONTENT_TYPE = 'application/octet-stream'


def release_name(display_name: Optional[str], project_version: Optional[str], tag: str) -> str:
    """
    Pick the release name: the first non-blank of display name,
    project version and tag. The first match wins.
    """

    return first_non_blank(display_name, project_version, default=tag)


def clean_repo(repo: str) -> str:
    """
    Turn a repository URL or 'owner/name' into 'owner/name'

    :param repo: e.g. 'https://github.com/owner/name.git' or 'owner/name'
    :return: 'owner/name'
    """

    repo = repo.strip()
    matched = fullmatch(r'(?:(?:https?://)?(?:www\.)?github\.com/|git@github\.com:)?'
                        r'([^/\s]+)/([^/\s]+?)(?:\.git)?/?', repo)

    return f'{matched.group(1)}/{matched.group(2)}' if matched else repo


def find_release(repository: Repository, tag: str) -> Optional[GitRelease]:
    """
    Look up the release for a tag, drafts included. GitHub's
    by-tag endpoint doesn't return drafts, so releases are listed
    and matched by tag name instead.

    :param repository: The repository
    :param tag: The tag name
    :return: The release, or None if there is none for the tag
    """

    for release in repository.get_releases():
        if release.tag_name == tag:
            return release
    return None


def has_ref(repository: Repository, ref: str) -> bool:
    """
    Check whether a repository has a ref

    :param repository: The repository
    :param ref: Fully qualified ref, e.g. 'refs/tags/v1.0.0'
    :return: Whether the ref exists
    :raise UploadError: If the lookup failed for any reason other than the ref not existing
    """

    try:
        # get_git_ref() may return a lazy object, reading 'object' forces the request
        return repository.get_git_ref(ref.removeprefix('refs/')).object is not None
    except UnknownObjectException:
        return False
    except GithubException as e:
        raise UploadError(f"Error checking whether '{ref}' exists on GitHub") from e


def _upload_asset(release: GitRelease, file: Path):
    asset = release.upload_asset(str(file), content_type=ASSET_CONTENT_TYPE)

    if asset is None:
        raise UploadError(f"Failed to upload '{file.name}' to GitHub release {release.tag_name}. No error found")

    log(f"Uploaded asset '{file.name}'")
    return asset


def reconcile_release(repository: Repository, config: PublishConfig, primary_file: Path,
                      additional_files: Sequence[Path] = ()) -> Optional[GitRelease]:
    """
    Create or update the GitHub release for the configured tag and attach
    the files to it.

    A missing release is created as a draft, so nobody sees it before the
    files are attached, and is published afterward unless 'draft' is set.
    An existing draft ends up with the configured draft state. An existing
    published release is never turned back into a draft.

    Files are uploaded one after another. If an upload fails, the error is
    raised right away: files uploaded before stay attached and the release
    isn't updated.

    :param repository: The repository to release on
    :param config: The publishing configuration
    :param primary_file: The main artifact
    :param additional_files: More files to attach, in upload order
    :return: The release, or None if the create / update policy didn't allow touching it
    :raise UploadError: If an upload returned nothing, or checking for the tag failed
    :raise github.GithubException: If any other API call failed
    """

    options = config.github
    tag = config.github_tag
    release = find_release(repository, tag)

    if release is None:
        if not options.create_release:
            log(f'Create GitHub Release is disabled and GitHub Release with tag {tag} does not exist', log_warn)
            return None

        # TODO Drop this check for draft releases once the intended behavior is settled. GitHub doesn't
        #      create the tag of a draft release, so create_tag has no effect when draft is set.
        if not options.create_tag and not has_ref(repository, f'refs/tags/{tag}'):
            log(f'Create tag for GitHub Release is disabled and tag {tag} does not already exist', log_warn)
            return None

        create_arguments = {
            'draft': True,
            'prerelease': False
        }
        if options.target is not None:
            create_arguments['target_commitish'] = options.target

        # New releases start as drafts while files are being attached
        started_as_draft = True
        release = repository.create_git_release(
                tag,
                release_name(config.display_name, config.project_version, tag),
                resolve_string(config.changelog, config.base_directory),
                **create_arguments
        )

        if release is None:
            raise UploadError(f'Could not get existing or create new GitHub Release with tag {tag}')

        log(f'Created draft release {tag}')
    elif not options.update_release:
        log(f'Update GitHub Release is disabled and GitHub Release with tag {tag} already exists', log_warn)
        return None
    else:
        started_as_draft = release.draft

    _upload_asset(release, primary_file)

    for additional_file in additional_files:
        _upload_asset(release, additional_file)

    updated = release.update_release(
            name=release.title or '',
            message=release.body or '',
            prerelease=config.release_type.is_prerelease,
            draft=options.draft if started_as_draft else release.draft
    )

    return updated if updated is not None else release


def _connect(config: PublishConfig) -> Github:
    return Github(auth=Auth.Token(config.api_keys.github),
                  base_url=cfg.global_options.github_api_url,
                  timeout=cfg.global_options.http_timeout,
                  user_agent=cfg.global_options.user_agent)


def github_upload(config: PublishConfig) -> Optional[GitRelease]:
    """
    Upload the artifact and additional files to a GitHub release

    :param config: The publishing configuration
    :return: The release, or None if nothing was uploaded
    :raise FileNotFoundError: If a file to upload doesn't exist
    """

    log(f'Uploading to {ansi.platform_color("github")}GitHub', log_sub_heading)

    required = check_required_values(config, Platform.GITHUB)
    if not required:
        log(f"Missing required value '{required.missing}' for GitHub, skipping", log_warn)
        return None

    artifact = config.artifact_for(Platform.GITHUB)
    upload_file = resolve_file(artifact, config.base_directory)
    if upload_file is None or not upload_file.exists():
        raise FileNotFoundError(f'Cannot find file {upload_file or artifact}')

    artifact_check = check_artifact(upload_file, config)
    if not artifact_check:
        log(f'Not uploading to GitHub: {artifact_check.missing}', log_warn)
        return None

    additional_files: list[Path] = []
    for additional in config.additional_files:
        additional_path = resolve_file(additional.artifact, config.base_directory)
        if additional_path is None or not additional_path.exists():
            raise FileNotFoundError(f'Cannot find file {additional_path or additional.artifact}')
        additional_files.append(additional_path)

    repo_name = clean_repo(config.github.repo)
    tag = config.github_tag

    # Nothing is created or uploaded in debug mode
    if config.debug:
        log('Debug mode is enabled. Not uploading to GitHub')
        log(f"Would upload '{upload_file.name}'"
            + ''.join(f", '{file.name}'" for file in additional_files)
            + f' to release {tag} of {repo_name}'
            + f" ({'draft' if config.github.draft else 'published'}"
            + f"{', pre-release' if config.release_type.is_prerelease else ''})")
        return None

    repository = _connect(config).get_repo(repo_name)
    release = reconcile_release(repository, config, upload_file, additional_files)

    if release is not None:
        log(f'Successfully uploaded version {config.project_version} (tag {tag}) to {repository.html_url}. '
            f'{release.html_url}')

    return release
