"""Internal utilities"""

# Exposed symbols
from . import ansi
from ._game_version import version_below
from ._http import content_type, new_session, pretty_json, request_json
from ._misc import all_match, any_match, first_non_blank, is_blank, log, log_error, log_heading, log_info, \
    log_sub_heading, log_warn, resolve_file, resolve_string
