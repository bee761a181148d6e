"""API endpoints"""

# Make the classes from the different
# package files importable from the
# outside

from . import tasks
from ._checks import CheckResult, check_artifact, check_required_values
from ._config import AdditionalFile, ApiKeys, Dependencies, GithubConfig, PublishConfig
from ._curseforge import CurseForgeClient, curseforge_upload
from ._enums import CurseEnvironment, ModLoader, Platform, ReleaseType
from ._errors import ConfigurationError, PublishError, UploadError
from ._github import github_upload, reconcile_release, release_name
from ._modrinth import ModrinthClient, modrinth_upload
from ._project import Project
