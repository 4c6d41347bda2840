import os
import re
from datetime import timedelta
from pathlib import Path

from amplify_deploy.constants import DURATION_UNITS

DURATION_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def get_root_path():
    project_root = Path(os.environ.get("PROJECT_ROOT", ".")).resolve()
    return project_root


def get_package_path():
    return Path(__file__).resolve().parent.parent


def parse_duration(value):
    """Parse a duration such as '5m', '1m30s', '500ms' or a number of seconds.

    Accepts the same unit suffixes as Go's time.ParseDuration. Returns a timedelta.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return _to_timedelta(value, value)

    text = str(value).strip()
    if not text:
        raise ValueError("invalid duration: empty string")

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)

    seconds = 0.0
    pos = 0
    for match in DURATION_PATTERN.finditer(text):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return _to_timedelta(sign * seconds, value)


def _to_timedelta(seconds, value):
    try:
        return timedelta(seconds=seconds)
    except (OverflowError, ValueError) as e:
        raise ValueError(f"invalid duration: {value!r} is out of range") from e


def format_duration(delta):
    total = delta.total_seconds()
    if total and abs(total) < 1:
        return f"{total * 1000:g}ms"
    minutes, seconds = divmod(abs(total), 60)
    hours, minutes = divmod(int(minutes), 60)
    sign = "-" if total < 0 else ""
    out = ""
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    out += f"{seconds:g}s"
    return sign + out
