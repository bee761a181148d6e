"""Closed value sets used in the publishing configuration"""

from enum import Enum


class _NamedEnum(Enum):
    """An enum whose members are identified by a lowercase name"""


    @classmethod
    def parse(cls, value: 'str | _NamedEnum'):
        """
        Canonicalize a user supplied name. Matching is case-insensitive
        and ignores surrounding whitespace.

        :param value: A member or its name
        :return: The member
        :raise ValueError: If the name is unknown
        """

        if isinstance(value, cls):
            return value

        name = str(value).strip().lower()
        for member in cls:
            if member.value == name:
                return member

        raise ValueError(f"Invalid {cls.__name__} '{value}', expected one of: "
                         + ', '.join(member.value for member in cls))


    def __str__(self):
        return self.value


class ReleaseType(_NamedEnum):
    RELEASE = 'release'
    BETA = 'beta'
    ALPHA = 'alpha'


    @property
    def is_prerelease(self) -> bool:
        return self in (ReleaseType.BETA, ReleaseType.ALPHA)


class ModLoader(_NamedEnum):
    FORGE = 'forge'
    NEOFORGE = 'neoforge'
    FABRIC = 'fabric'
    QUILT = 'quilt'
    RIFT = 'rift'
    LITELOADER = 'liteloader'
    MODLOADER = 'modloader'
    BUKKIT = 'bukkit'
    PAPER = 'paper'
    SPIGOT = 'spigot'
    SPONGE = 'sponge'
    VELOCITY = 'velocity'
    BUNGEECORD = 'bungeecord'
    WATERFALL = 'waterfall'
    FOLIA = 'folia'
    PURPUR = 'purpur'
    DATAPACK = 'datapack'


class Platform(_NamedEnum):
    CURSEFORGE = 'curseforge'
    MODRINTH = 'modrinth'
    GITHUB = 'github'


class CurseEnvironment(_NamedEnum):
    CLIENT = 'client'
    SERVER = 'server'
    BOTH = 'both'
