"""Miscellaneous functions"""

from sys import stderr, stdout

from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from modpublisher.util import ansi


def is_blank(value: Optional[str]) -> bool:
    """Whether a string is None, empty or only whitespace"""

    return value is None or not str(value).strip()


def first_non_blank(*candidates: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """
    Pick the first candidate that isn't blank. Candidates are
    not merged, the first match wins.

    :param candidates: The candidates, in order of preference
    :param default: Returned if every candidate is blank
    :return: The first non-blank candidate, or the default
    """

    for candidate in candidates:
        if not is_blank(candidate):
            return candidate
    return default


def any_match(items: Iterable[Any], condition: Callable[[Any], bool]) -> bool:
    for item in items:
        if condition(item):
            return True
    return False


def all_match(items: Iterable[Any], condition: Callable[[Any], bool]) -> bool:
    for item in items:
        if not condition(item):
            return False
    return True


def resolve_string(source: Any, base_directory: Optional[Path] = None) -> str:
    """
    Turn a changelog-like value into text. Callables are invoked
    first (their result is resolved again), paths are read, and strings
    naming an existing file are read as well. Anything else is used
    literally.

    :param source: A string, a path, or a callable returning either
    :param base_directory: Directory that relative paths are resolved against
    :return: The resolved text. Empty if source is None
    """

    if source is None:
        return ''

    if callable(source):
        return resolve_string(source(), base_directory)

    if isinstance(source, Path):
        path = source if base_directory is None or source.is_absolute() else base_directory / source
        return path.read_text(encoding='utf-8')

    text = str(source)

    # Only short, single line strings may be file names
    if '\n' not in text and 0 < len(text) < 260:
        candidate = Path(text)
        if base_directory is not None and not candidate.is_absolute():
            candidate = base_directory / candidate

        try:
            if candidate.is_file():
                return candidate.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            log(f"Cannot read '{candidate}', using the text as it is: {e}", log_warn)

    return text


def resolve_file(reference: Any, base_directory: Optional[Path] = None) -> Optional[Path]:
    """
    Resolve an artifact reference to a concrete file path. The file
    is not required to exist.

    :param reference: A path, a string, or a callable returning either (e.g. a build task's output)
    :param base_directory: Directory that relative paths are resolved against
    :return: The absolute path, or None if the reference is empty
    """

    if callable(reference):
        reference = reference()

    if reference is None or (isinstance(reference, str) and is_blank(reference)):
        return None

    path = Path(reference)
    if base_directory is not None and not path.is_absolute():
        path = base_directory / path

    return path.resolve()


# Logging

log_info = 0
log_heading = 1
log_sub_heading = 2
log_warn = 10
log_error = 11


def log(msg: str, level: int = log_info, flush: bool = False):
    """Print styled log message to appropriate output stream"""

    print(
            (f" {ansi.bold}{ansi.green}ℹ{ansi.reset}" if level == log_info else
             f"{ansi.bold}{ansi.blue}==⇒{ansi.reset}{ansi.bold}" if level == log_heading else
             f"{ansi.light_blue}--->{ansi.reset}{ansi.bold}" if level == log_sub_heading else
             f" {ansi.yellow}⚠" if level == log_warn else
             f" {ansi.red}{ansi.bold}⮾{ansi.not_bold}")
            + f" {msg}{ansi.reset}"
            , file=stderr if level >= log_warn else stdout, flush=(flush or level >= log_warn))
