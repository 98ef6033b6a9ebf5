"""Layered properties files.

Two files are read from the properties search path:

- ``<environment>.properties`` (lower-cased name, e.g. ``production.properties``)
- ``environment.properties``, shared by every environment

Either file may be missing; a missing file is an empty layer. Values from
the environment-specific file win over the shared one.

File syntax follows the usual properties format: ``#``/``!`` comments,
``key=value``, ``key:value`` or ``key value``, backslash line continuation
and ``\\uXXXX`` escapes. Unlike the usual format, a line with an empty key
(``=value``) is rejected as malformed instead of defining the key ``""``,
and files are read as UTF-8 rather than ISO-8859-1.
"""

import re
import string
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from envscope.exceptions import ConfigurationError, PropertiesParseError
from envscope.logger import Logger, get_logger
from envscope.names import EnvironmentName

PROPERTIES_SUFFIX = ".properties"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_NEWLINE = re.compile(r"\r\n|\r|\n")


def _continues(line: str) -> bool:
    """An odd number of trailing backslashes joins the next line."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (first line number, logical line) with comments and blanks removed."""
    lines = _NEWLINE.split(text)
    i = 0
    while i < len(lines):
        lineno = i + 1
        line = lines[i].lstrip(_WHITESPACE)
        i += 1
        if not line or line[0] in "#!":
            continue
        while _continues(line):
            line = line[:-1]
            if i >= len(lines):
                break
            line += lines[i].lstrip(_WHITESPACE)
            i += 1
        yield lineno, line


def _unescape(raw: str, source: Optional[str], lineno: int) -> str:
    out: List[str] = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= len(raw):
            break
        c = raw[i]
        if c == "u":
            digits = raw[i + 1 : i + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise PropertiesParseError(
                    f"Malformed \\uXXXX escape: '\\u{digits}'", source=source, line=lineno
                )
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(c, c))
        i += 1
    return "".join(out)


def _split_key_value(line: str) -> Tuple[str, str]:
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str, source: Optional[str] = None) -> Dict[str, str]:
    """Parse properties-format text into a dict.

    Later definitions of the same key replace earlier ones. Empty keys are
    rejected rather than accepted as ``""``.

    Args:
        text: File content
        source: File name used in error messages

    Raises:
        PropertiesParseError: On an empty key or a malformed ``\\u`` escape
    """
    result: Dict[str, str] = {}
    for lineno, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        key = _unescape(raw_key, source, lineno)
        if not key:
            raise PropertiesParseError("Property line has no key", source=source, line=lineno)
        result[key] = _unescape(raw_value, source, lineno)
    return result


@dataclass(frozen=True)
class PropertySource:
    """The environment-specific layer and the common layer, both read-only."""

    environment: Mapping[str, str] = field(default_factory=dict)
    common: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "environment", MappingProxyType(dict(self.environment)))
        object.__setattr__(self, "common", MappingProxyType(dict(self.common)))

    def merged(self) -> Dict[str, str]:
        """Environment-specific values layered over common ones."""
        merged = dict(self.common)
        merged.update(self.environment)
        return merged


class PropertiesLoader:
    """Read the two property layers for an environment from a search path.

    Example:
        loader = PropertiesLoader([Path("config")])
        source = loader.load("PRODUCTION")
        base = source.merged()
    """

    def __init__(
        self,
        search_path: Sequence[Path],
        common_name: str = "environment",
        logger: Optional[Logger] = None,
    ):
        self.search_path = [Path(p) for p in search_path]
        self.common_name = common_name
        self.logger = logger or get_logger()

    def find(self, filename: str) -> Optional[Path]:
        """First file called ``filename`` on the search path, if any."""
        for root in self.search_path:
            candidate = root / filename
            if candidate.is_file():
                return candidate
        return None

    def read(self, filename: str) -> Dict[str, str]:
        """Parse ``filename`` from the search path; missing files give ``{}``.

        Raises:
            PropertiesParseError: If the file is not valid UTF-8 or is malformed
            ConfigurationError: If the file exists but cannot be read
        """
        path = self.find(filename)
        if path is None:
            self.logger.debug("Properties file not found", file=filename)
            return {}

        try:
            data = path.read_bytes()
        except OSError as e:
            raise ConfigurationError(
                "PROPERTIES_UNREADABLE",
                f"Cannot read properties file {path}: {e}",
                details={"source": str(path)},
            ) from e

        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise PropertiesParseError(
                f"Properties file is not valid UTF-8: {e.reason}", source=str(path)
            ) from e

        try:
            values = parse_properties(text, source=str(path))
        except PropertiesParseError as e:
            self.logger.error("Malformed properties file", file=str(path), line=e.line)
            raise

        self.logger.debug("Properties file loaded", file=str(path), keys=len(values))
        return values

    def load(self, name: str) -> PropertySource:
        """Load the environment-specific and common layers for ``name``.

        Raises:
            ValidationError: If ``name`` is blank or not a single path component
        """
        specific = self.read(f"{EnvironmentName(name).directory}{PROPERTIES_SUFFIX}")
        common = self.read(f"{self.common_name}{PROPERTIES_SUFFIX}")
        return PropertySource(environment=specific, common=common)


__all__ = [
    "PROPERTIES_SUFFIX",
    "parse_properties",
    "PropertySource",
    "PropertiesLoader",
]
