"""
Variable expansion for raw document text.

Expansion runs over the text of a document before it is parsed, so a
config like this:

    modules:
      http:
        port: ${HTTP_PORT:8080}

reads 8080 unless HTTP_PORT is defined.

Token grammar:
- ``${KEY}``: required; UndefinedVariable if KEY has no value
- ``${KEY:DEFAULT}``: DEFAULT is used verbatim when KEY has no value;
  a DEFAULT of ``""`` substitutes the empty string
- ``$KEY``: shell-style name (letters, digits, underscore, not starting
  with a digit); required
- ``$$``: a literal ``$``

Any other ``$`` is left untouched. Expansion is a single pass: values and
defaults are never expanded again.

The Expander is incremental. Text can be fed in arbitrary chunks and only
the token currently being matched is held back.
"""

from __future__ import annotations

import codecs as _codecs
import enum as _enum
import io as _io
import logging as _logging
import os as _os
import string as _string
import typing as _typing

import layerconf.errors as errors
import layerconf.settings as settings_module

_logger = _logging.getLogger(__name__)

Lookup = _typing.Callable[[str], str | None]
"""Variable lookup: returns the value, or None when the key is not defined."""

_NAME_START = frozenset(_string.ascii_letters + "_")
_NAME_CHARS = frozenset(_string.ascii_letters + _string.digits + "_")

DEFAULT_CHUNK_SIZE = 8192


def environ_lookup(key: str) -> str | None:
    """Look up a variable in the process environment."""
    return _os.environ.get(key)


class _State(_enum.Enum):
    TEXT = "text"
    DOLLAR = "dollar"  # saw "$"
    BRACED = "braced"  # inside "${...", collecting the body
    NAME = "name"  # inside "$NAME"


class Expander:
    """
    Incremental variable expander.

    Call feed() with successive chunks of text and close() once at the
    end. Each call returns the expanded text that is ready so far.

    Args:
        lookup: Variable lookup function.
        settings: Separator conventions (defaults from the environment).

    Example:
        >>> expander = Expander({"P": "9090"}.get)
        >>> expander.feed("port: ${P:80") + expander.feed("80}") + expander.close()
        'port: 9090'
    """

    def __init__(
        self,
        lookup: Lookup,
        settings: settings_module.ResolverSettings | None = None,
    ) -> None:
        if settings is None:
            settings = settings_module.default_settings()
        self._lookup = lookup
        self._default_separator = settings.default_separator
        self._empty_default = settings.empty_default
        self._state = _State.TEXT
        self._token: list[str] = []

    def feed(self, text: str) -> str:
        """
        Expand a chunk of text.

        Raises:
            UndefinedVariable: If a completed token cannot be resolved.
        """
        out: list[str] = []
        for ch in text:
            self._step(ch, out)
        return "".join(out)

    def close(self) -> str:
        """
        Flush whatever token is still pending at end of input.

        Raises:
            UndefinedVariable: If a trailing ``$NAME`` cannot be resolved.
        """
        state, token = self._state, "".join(self._token)
        self._state = _State.TEXT
        self._token = []

        if state is _State.DOLLAR:
            return "$"
        if state is _State.NAME:
            return self._substitute(token, "")
        if state is _State.BRACED:
            _logger.warning("unterminated variable reference '${%s' left as-is", token)
            return "${" + token
        return ""

    def _step(self, ch: str, out: list[str]) -> None:
        state = self._state

        if state is _State.TEXT:
            if ch == "$":
                self._state = _State.DOLLAR
            else:
                out.append(ch)

        elif state is _State.DOLLAR:
            if ch == "$":
                out.append("$")
                self._state = _State.TEXT
            elif ch == "{":
                self._state = _State.BRACED
            elif ch in _NAME_START:
                self._token.append(ch)
                self._state = _State.NAME
            else:
                out.append("$")
                out.append(ch)
                self._state = _State.TEXT

        elif state is _State.BRACED:
            if ch == "}":
                body = "".join(self._token)
                self._token = []
                self._state = _State.TEXT
                key, _, default = body.partition(self._default_separator)
                out.append(self._substitute(key, default))
            else:
                self._token.append(ch)

        elif state is _State.NAME:
            if ch in _NAME_CHARS:
                self._token.append(ch)
                return
            name = "".join(self._token)
            self._token = []
            self._state = _State.TEXT
            out.append(self._substitute(name, ""))
            # The terminating character may itself start a new token.
            self._step(ch, out)

    def _substitute(self, key: str, default: str) -> str:
        value = self._lookup(key)
        if value is not None:
            return value
        if default == "":
            raise errors.UndefinedVariable(key)
        if default == self._empty_default:
            return ""
        return default


def expand(
    text: str,
    lookup: Lookup,
    *,
    settings: settings_module.ResolverSettings | None = None,
) -> str:
    """
    Expand all variable tokens in text.

    Args:
        text: Raw document text.
        lookup: Variable lookup function.
        settings: Separator conventions.

    Returns:
        The expanded text.

    Raises:
        UndefinedVariable: If a token has no value and no usable default.
    """
    expander = Expander(lookup, settings)
    return expander.feed(text) + expander.close()


def detect_encoding(prefix: bytes) -> str:
    """
    Pick a codec for binary input from its leading bytes.

    Follows PyYAML's reader: a UTF-16 byte-order mark selects UTF-16 in
    that byte order, anything else is UTF-8. The returned codec consumes
    the byte-order mark itself (``utf-16`` and ``utf-8-sig``).
    """
    if prefix.startswith((_codecs.BOM_UTF16_LE, _codecs.BOM_UTF16_BE)):
        return "utf-16"
    return "utf-8-sig"


class ExpandingReader(_io.TextIOBase):
    """
    Read-only text stream that expands variables on the fly.

    Wraps a binary or text stream. Binary input is decoded incrementally,
    so multi-byte characters split across chunks are handled. Without an
    explicit encoding, the codec is chosen from a leading byte-order mark
    the same way PyYAML does for raw bytes. The wrapped
    stream is not closed by this reader.

    Args:
        stream: Object with a read(size) method returning bytes or str.
        lookup: Variable lookup function.
        settings: Separator conventions.
        encoding: Encoding of binary input; None detects it.
        chunk_size: Size of reads from the wrapped stream.
    """

    def __init__(
        self,
        stream: _typing.Any,
        lookup: Lookup,
        *,
        settings: settings_module.ResolverSettings | None = None,
        encoding: str | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        super().__init__()
        self._stream = stream
        self._expander = Expander(lookup, settings)
        self._decoder: _codecs.IncrementalDecoder | None = None
        if encoding is not None:
            self._decoder = _codecs.getincrementaldecoder(encoding)()
        self._pending = b""
        self._chunk_size = chunk_size
        self._buffer = ""
        self._eof = False

    @property
    def name(self) -> str | None:
        """Name of the wrapped stream, if it has one."""
        return getattr(self._stream, "name", None)

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> str:
        if size is None or size < 0:
            while not self._eof:
                self._fill()
            result, self._buffer = self._buffer, ""
            return result

        while len(self._buffer) < size and not self._eof:
            self._fill()
        result, self._buffer = self._buffer[:size], self._buffer[size:]
        return result

    def _fill(self) -> None:
        chunk = self._stream.read(self._chunk_size)
        if not chunk:
            tail = self._decode(b"", final=True)
            self._buffer += self._expander.feed(tail) + self._expander.close()
            self._eof = True
            return

        if isinstance(chunk, bytes):
            chunk = self._decode(chunk, final=False)
        self._buffer += self._expander.feed(chunk)

    def _decode(self, data: bytes, *, final: bool) -> str:
        if self._decoder is None:
            # A byte-order mark is two bytes; hold input back until both are seen.
            self._pending += data
            if len(self._pending) < 2 and not final:
                return ""
            data, self._pending = self._pending, b""
            encoding = detect_encoding(data)
            _logger.debug("decoding expanded input as %s", encoding)
            self._decoder = _codecs.getincrementaldecoder(encoding)()
        return self._decoder.decode(data, final)
