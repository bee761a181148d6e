from os import chdir
from os.path import basename
from pathlib import Path
from sys import argv, exit
from typing import Optional, Type

import requests
from github import GithubException

from modpublisher import config as cfg, api, util


def main(project_class: Type[api.Project], build_script_file_name: str, args: Optional[list[str]] = None):
    """
    Start modpublisher for a project

    :param project_class: A class extending modpublisher.api.Project
    :param build_script_file_name: File path of the build script, obtained with __file__
    :param args: Optional. The tasks to run, defaults to the command line arguments
    """

    # Set root directory
    cfg.global_options.script_directory = Path(build_script_file_name).parent.resolve()
    chdir(str(cfg.global_options.script_directory))

    tasks = argv[1:] if args is None else args

    # Configure project
    project = project_class()


    def show_help():
        """Print help and exit"""

        util.log(
                f"Usage: {basename(build_script_file_name)} task...\n"
                "  Available tasks are:\n"
                "   help        Show this help and exit\n"
                "   config      Print out the publishing configuration\n"
                "   curseforge  Upload to CurseForge\n"
                "   modrinth    Upload to Modrinth\n"
                "   github      Upload to GitHub Releases\n"
                "   publish     Upload to every platform that has an API key"
        )
        exit()


    # Execute commands

    # Show help, if appropriate
    if len(tasks) == 0 or 'help' in tasks or len([task for task in tasks
                                                  if task not in api.tasks.task_map]) != 0:
        show_help()

    for command in tasks:
        if project.has_failed():
            break

        try:
            api.tasks.task_map[command](project)
        except (api.PublishError, OSError, requests.RequestException, GithubException) as e:
            util.log(f"Task '{command}' failed: {type(e).__name__}: {e}", util.log_error)
            project.fail()

    # Show end result
    if project.has_failed():
        print(f'\n{util.ansi.red}{util.ansi.bold}[✘]{util.ansi.not_bold} Publishing failed{util.ansi.reset}')
        exit(1)
    else:
        print(f'\n{util.ansi.green}{util.ansi.bold}[✔]{util.ansi.not_bold} Publishing successful{util.ansi.reset}')
