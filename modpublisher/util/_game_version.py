"""Game version comparison"""

from re import match


def _numeric_parts(version_name: str) -> tuple[int, ...]:
    """
    Leading numeric components of a version name, e.g. (1, 20, 1) for
    '1.20.1' or (1, 21) for '1.21-pre3'. Names that don't start with a
    digit (old 'b1.7.3', 'a1.2.6', 'rd-132211', ...) have no numeric parts.
    """

    found = match(r'\d+(?:\.\d+)*', version_name.strip())
    if found is None:
        return ()

    return tuple(int(part) for part in found.group(0).split('.'))


def _padded(parts: tuple[int, ...], length: int) -> tuple[int, ...]:
    return parts + (0,) * (length - len(parts))


def version_below(version_name: str, threshold: str) -> bool:
    """
    Check whether a game version is older than a threshold version.
    Pre-release suffixes are ignored, and versions that don't start with
    a number count as older than any numbered version.

    :param version_name: The version to check, e.g. '1.20.1' or 'b1.7.3'
    :param threshold: A plain numbered version, e.g. '1.0'
    :return: Whether version_name < threshold
    """

    version_parts = _numeric_parts(version_name)
    threshold_parts = _numeric_parts(threshold)

    if not version_parts:
        return bool(threshold_parts)

    length = max(len(version_parts), len(threshold_parts))
    return _padded(version_parts, length) < _padded(threshold_parts, length)
