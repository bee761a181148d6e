"""Utilities related to talking to platform APIs"""

import json
import mimetypes
from pathlib import Path
from typing import Any, Optional

import requests

from modpublisher import config as cfg
from . import _misc as m


def new_session(headers: Optional[dict[str, str]] = None) -> requests.Session:
    """
    Create a requests session that identifies as modpublisher

    :param headers: Extra headers to send with every request (e.g. authorization)
    :return: The session
    """

    session = requests.Session()
    session.headers['User-Agent'] = cfg.global_options.user_agent

    if headers:
        session.headers.update(headers)

    return session


def request_json(session: requests.Session, method: str, url: str, **kwargs) -> Any:
    """
    Send a request and decode the JSON response. There are no retries,
    errors are raised to the caller.

    :param session: The session to use
    :param method: HTTP method, e.g. 'GET'
    :param url: Full URL
    :param kwargs: Passed on to requests
    :return: The decoded JSON body, or None for an empty body
    :raise requests.HTTPError: If the response has an error status
    """

    kwargs.setdefault('timeout', cfg.global_options.http_timeout)

    with session.request(method, url, **kwargs) as response:
        if not response.ok:
            m.log(f"{method} '{url}' failed with status {response.status_code}: {response.text}", m.log_error)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()


def pretty_json(data: Any) -> str:
    """Format data as indented JSON for logging"""

    return json.dumps(data, indent=2, ensure_ascii=False)


def content_type(file: Path) -> str:
    """
    Pick the upload content type of a file from its suffix

    :param file: The file to upload
    :return: 'application/java-archive' for jars, a guess for other known types, else 'application/octet-stream'
    """

    if file.suffix.lower() == '.jar':
        return 'application/java-archive'

    guessed, _ = mimetypes.guess_type(file.name)
    return guessed or 'application/octet-stream'
