import logging
import os
import time

from scaleruler.constants import SETTINGS_HEADER
from scaleruler.paths import SETTINGS_FILE

logger = logging.getLogger(__name__)

_ESCAPE_OUT = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}
_ESCAPE_IN = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_HEX_DIGITS = "0123456789abcdefABCDEF"


class SettingsStore:
    """Key-value string store persisted as a whole."""

    load_error = None

    def get(self, key, default=None):
        raise NotImplementedError()

    def set(self, key, value):
        raise NotImplementedError()

    def delete(self, key):
        raise NotImplementedError()

    def load(self):
        raise NotImplementedError()

    def persist(self):
        raise NotImplementedError()


def escape_property(text, is_key=False):
    out = []
    for index, ch in enumerate(text):
        if ch == " ":
            out.append("\\ " if index == 0 or is_key else " ")
        elif ch in _ESCAPE_OUT:
            out.append(_ESCAPE_OUT[ch])
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            encoded = ch.encode("utf-16-be", "surrogatepass")
            for offset in range(0, len(encoded), 2):
                out.append("\\u%04X" % int.from_bytes(encoded[offset:offset + 2], "big"))
        else:
            out.append(ch)
    return "".join(out)


def unescape_property(text):
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        i += 1
        if ch != "\\" or i >= len(text):
            out.append(ch)
            continue
        ch = text[i]
        i += 1
        if ch == "u":
            digits = text[i:i + 4]
            if len(digits) != 4 or any(d not in _HEX_DIGITS for d in digits):
                raise ValueError("Malformed \\uxxxx encoding.")
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_ESCAPE_IN.get(ch, ch))
    return _join_surrogate_pairs(out)


def _join_surrogate_pairs(chars):
    """Merge adjacent high/low surrogates; lone surrogates are kept as they are."""
    out = []
    i = 0
    while i < len(chars):
        ch = chars[i]
        if "\ud800" <= ch <= "\udbff" and i + 1 < len(chars) and "\udc00" <= chars[i + 1] <= "\udfff":
            high = ord(ch) - 0xD800
            low = ord(chars[i + 1]) - 0xDC00
            out.append(chr(0x10000 + (high << 10) + low))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _ends_with_continuation(line):
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(raw_text):
    pending = None
    for raw_line in raw_text.splitlines():
        line = raw_line.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
        if _ends_with_continuation(line):
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        yield pending


def _split_key_value(line):
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(raw_text, skipped=None):
    """Parse properties text; lines with broken escapes are skipped and logged.

    When ``skipped`` is a list, the raw text of every skipped line is appended.
    """
    data = {}
    for line in _logical_lines(raw_text):
        key, value = _split_key_value(line)
        try:
            data[unescape_property(key)] = unescape_property(value)
        except ValueError as exc:
            logger.warning("Skipping malformed settings line %r: %s", line, exc)
            if skipped is not None:
                skipped.append(line)
    return data


def dump_properties(data, header=SETTINGS_HEADER):
    lines = []
    if header:
        lines.append(f"#{header}")
    lines.append("#" + time.strftime("%a %b %d %H:%M:%S %Z %Y"))
    for key, value in data.items():
        lines.append(f"{escape_property(key, is_key=True)}={escape_property(value)}")
    return "\n".join(lines) + "\n"


class PropertiesSettingsStore(SettingsStore):
    """Settings kept in a single ``key=value`` properties file.

    Load and persist failures are logged and recorded in ``load_error`` /
    ``save_error``; callers keep working with the in-memory data.
    """

    def __init__(self, path=None):
        self.path = path or SETTINGS_FILE
        self.data = {}
        self.load_error = None
        self.save_error = None
        self.skipped_lines = []

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[str(key)] = str(value)

    def delete(self, key):
        return self.data.pop(key, None) is not None

    def load(self):
        self.load_error = None
        self.skipped_lines = []
        self.data = {}
        if not os.path.exists(self.path):
            return self.data
        try:
            with open(self.path, "r", encoding="latin-1") as f:
                self.data = parse_properties(f.read(), self.skipped_lines)
        except (OSError, UnicodeError) as exc:
            self.load_error = str(exc)
            logger.warning("Could not load settings from %s: %s", self.path, exc)
        return self.data

    def persist(self):
        self.save_error = None
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="latin-1", newline="\n") as f:
                f.write(dump_properties(self.data))
        except (OSError, UnicodeError) as exc:
            self.save_error = str(exc)
            logger.warning("Could not save settings to %s: %s", self.path, exc)
            return False
        return True


__all__ = [
    "PropertiesSettingsStore",
    "SettingsStore",
    "dump_properties",
    "escape_property",
    "parse_properties",
    "unescape_property",
]
