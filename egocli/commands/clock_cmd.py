"""
ego clock  ──  current time, or a clock value converted to another timezone
"""
import re
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..utils.logging import warn, write_line

NAME = "clock"
DESCRIPTION = "Shows the current time or a clock value of another timezone."
SYNTAX = "[FROM-CLOCK] [TO-TIMEZONE] [FROM-TIMEZONE] [options]"
EXAMPLES = [
    "ego clock",
    "ego clock 21:50",
    'ego clock 21:50 --format="HH:mm"',
    'ego clock 21:50 "America/New_York"',
    'ego clock 21:50 "America/New_York" "UTC"',
]

DEFAULT_FORMAT = "HH:mm:ss"

_CLOCK = re.compile(r"^(\d{1,2})(?::(\d{1,2}))?(?::(\d{1,2}))?$")

# moment.js style tokens, longest first
_TOKENS = re.compile(
    r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|A|a|ZZ|Z"
)


def add_arguments(parser):
    parser.add_argument("clock", nargs="?", default=None, metavar="FROM-CLOCK",
                        help="Clock value like 13:45 or 13:45:51 (default: now)")
    parser.add_argument("to_tz", nargs="?", default="", metavar="TO-TIMEZONE",
                        help="Target timezone, like 'America/New_York' (default: UTC)")
    parser.add_argument("from_tz", nargs="?", default="", metavar="FROM-TIMEZONE",
                        help="Timezone of FROM-CLOCK (default: local timezone)")
    parser.add_argument("-f", "--format", default=DEFAULT_FORMAT, metavar="FORMAT",
                        help=f"Output format, moment.js style tokens (default: {DEFAULT_FORMAT})")


def _token(dt: datetime, token: str) -> str:
    if token.startswith("["):
        return token[1:-1]
    hour12 = dt.hour % 12 or 12
    offset = dt.strftime("%z")
    values = {
        "YYYY": f"{dt.year:04d}", "YY": f"{dt.year % 100:02d}",
        "MMMM": dt.strftime("%B"), "MMM": dt.strftime("%b"),
        "MM": f"{dt.month:02d}", "M": str(dt.month),
        "DD": f"{dt.day:02d}", "D": str(dt.day),
        "dddd": dt.strftime("%A"), "ddd": dt.strftime("%a"),
        "HH": f"{dt.hour:02d}", "H": str(dt.hour),
        "hh": f"{hour12:02d}", "h": str(hour12),
        "mm": f"{dt.minute:02d}", "m": str(dt.minute),
        "ss": f"{dt.second:02d}", "s": str(dt.second),
        "A": "PM" if dt.hour >= 12 else "AM", "a": "pm" if dt.hour >= 12 else "am",
        "ZZ": offset, "Z": f"{offset[:3]}:{offset[3:]}" if offset else "",
    }
    return values[token]


def format_clock(dt: datetime, fmt: str = DEFAULT_FORMAT) -> str:
    """Render *dt* with moment.js style tokens; ``[...]`` is literal text."""
    return _TOKENS.sub(lambda m: _token(dt, m.group(0)), fmt)


def get_zone(name: str):
    """ZoneInfo for *name*; ValueError for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}'") from e


def parse_clock(value: str, tz=None, today: Optional[date] = None) -> datetime:
    """
    ``H[:m[:s]]`` on *today* in *tz* (local timezone when None).
    Raises ValueError for anything else.
    """
    match = _CLOCK.match(value.strip())
    if not match:
        raise ValueError(f"Invalid clock value '{value}'")
    hour, minute, second = (int(g or 0) for g in match.groups())

    if tz is None:
        tz = datetime.now().astimezone().tzinfo
    day = today or datetime.now(tz).date()
    # out of range parts raise ValueError here
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=tz)


def convert_clock(value: Optional[str], to_tz: str = "", from_tz: str = "",
                  today: Optional[date] = None) -> datetime:
    target = get_zone(to_tz.strip() or "UTC")
    value = (value or "").strip()
    if not value:
        return datetime.now(timezone.utc).astimezone(target)
    source = get_zone(from_tz.strip()) if from_tz.strip() else None
    return parse_clock(value, source, today).astimezone(target)


def execute(ctx):
    args = ctx.args
    fmt = args.format.strip() or DEFAULT_FORMAT

    if args.clock is None:
        write_line(format_clock(datetime.now(timezone.utc), fmt))
        return

    try:
        result = convert_clock(args.clock, args.to_tz, args.from_tz)
    except ValueError as e:
        warn(f"{e}. Please use a value like 13:45:51 and a timezone like 'Europe/Berlin'!")
        ctx.exit(1)
    write_line(format_clock(result, fmt))
