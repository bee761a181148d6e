"""Some ANSI escape codes for styling"""


def _ansi(seq: str) -> str:
    return f'\033[{seq}m'


bold = _ansi('1')
not_bold = _ansi('22')  # "Normal intensity"
green = _ansi('38;2;98;204;22')
yellow = _ansi('38;2;219;185;42')
red = _ansi('38;2;247;32;82')
gray = _ansi('38;2;150;150;150')
blue = _ansi('38;2;79;141;234')
light_blue = _ansi('38;2;78;152;216')
orange = _ansi('38;2;241;100;54')     # CurseForge
teal = _ansi('38;2;27;217;106')       # Modrinth
white = _ansi('38;2;240;246;252')     # GitHub

reset = _ansi('0')


def platform_color(platform_name: str) -> str:
    """
    Get the brand color used when printing a platform name

    :param platform_name: 'curseforge', 'modrinth' or 'github'
    :return: The escape sequence, or an empty string for unknown names
    """

    return {
        'curseforge': orange,
        'modrinth': teal,
        'github': white
    }.get(platform_name, '')
