#!/usr/bin/python3
from os import environ

from modpublisher import api, main


class Project(api.Project):

    def publishing(self):
        self.api_keys(curseforge=environ.get('CURSE_TOKEN'),
                      modrinth=environ.get('MODRINTH_TOKEN'),
                      github=environ.get('GITHUB_TOKEN'))

        self.curseforge_id(123456)
        self.modrinth_id('AABBCCDD')
        self.github_repo('https://github.com/example/testing-mod')

        self.project_version('1.0-DEBUG')
        self.display_name('Testing Mod 1.0')
        self.release_type('beta')
        self.changelog('CHANGELOG.md')

        self.artifact('build/libs/testing-mod-1.0-DEBUG.jar')
        self.additional_file('build/libs/testing-mod-1.0-DEBUG-sources.jar', display_name='Sources')

        self.game_versions('1.20.1', '1.20.2')
        self.loaders('fabric', 'quilt')
        self.java_versions(17)
        self.curse_environment('client')

        self.curseforge_depends(required='fabric-api', optional=('modmenu',))
        self.modrinth_depends(required='fabric-api')

        self.github(tag='v1.0-DEBUG', draft=True)
        self.debug()


main(Project, __file__)
