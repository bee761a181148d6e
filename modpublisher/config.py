"""Shared variables"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Options:
    script_directory: Optional[Path] = None
    user_agent: str = 'modpublisher/1.0 (https://github.com/firstdarkdev/modpublisher)'
    http_timeout: int = 60  # Seconds, per request
    curseforge_api_url: str = 'https://minecraft.curseforge.com/api'
    modrinth_api_url: str = 'https://api.modrinth.com/v2'
    modrinth_staging_api_url: str = 'https://staging-api.modrinth.com/v2'
    github_api_url: str = 'https://api.github.com'


global_options: Options = Options()


def reset():
    """Restore the default options"""

    global global_options
    global_options = Options()
