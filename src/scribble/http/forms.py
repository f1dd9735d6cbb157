"""Form data parsing — URL-encoded and multipart.

URL-encoded forms use stdlib ``urllib.parse``.
``python-multipart`` is an optional dependency (``pip install scribble[forms]``)
needed only for ``multipart/form-data`` bodies.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

from scribble.errors import ConfigurationError, UnsupportedFormEncoding


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    The file content is held in memory as bytes; request bodies are
    already bounded by ``AppConfig.max_content_length``.
    """

    filename: str
    content_type: str
    size: int
    _content: bytes

    async def read(self) -> bytes:
        """Return the file content as bytes."""
        return self._content

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key (string fields only).
    ``get_list`` returns all values for a key.
    ``files`` provides access to uploaded files by field name.

    Usage::

        form = await request.form()
        title = form.get("title", "")
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", files or {})

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        UnsupportedFormEncoding: If the content type is not a form
            encoding, or a multipart type lacks its boundary.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise UnsupportedFormEncoding(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    """Parse URL-encoded form data; undecodable bytes become U+FFFD."""
    parsed = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
    return FormData(parsed)


class _PartCollector:
    """Accumulates python-multipart parser callbacks into fields and files."""

    def __init__(self) -> None:
        self.fields: dict[str, list[str]] = {}
        self.files: dict[str, UploadFile] = {}
        self._headers: dict[str, str] = {}
        self._header_name = ""
        self._content = bytearray()
        self._name: str | None = None
        self._filename: str | None = None

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.begin,
            "on_header_field": self.header_field,
            "on_header_value": self.header_value,
            "on_part_data": self.data,
            "on_part_end": self.end,
        }

    def begin(self) -> None:
        self._headers = {}
        self._content = bytearray()
        self._name = None
        self._filename = None

    def header_field(self, chunk: bytes, start: int, end: int) -> None:
        self._header_name = chunk[start:end].decode("latin-1").lower()

    def header_value(self, chunk: bytes, start: int, end: int) -> None:
        from python_multipart.multipart import parse_options_header

        value = chunk[start:end].decode("latin-1")
        self._headers[self._header_name] = value
        if self._header_name != "content-disposition":
            return
        _, params = parse_options_header(value.encode("latin-1"))
        if b"name" in params:
            self._name = params[b"name"].decode("utf-8")
        if b"filename" in params:
            self._filename = params[b"filename"].decode("utf-8")

    def data(self, chunk: bytes, start: int, end: int) -> None:
        self._content += chunk[start:end]

    def end(self) -> None:
        if self._name is None:
            return
        raw = bytes(self._content)
        if self._filename is None:
            self.fields.setdefault(self._name, []).append(raw.decode("utf-8", errors="replace"))
            return
        self.files[self._name] = UploadFile(
            filename=self._filename,
            content_type=self._headers.get("content-type", "application/octet-stream"),
            size=len(raw),
            _content=raw,
        )


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data with python-multipart.

    Raises ``ConfigurationError`` if ``python-multipart`` is not installed
    and ``UnsupportedFormEncoding`` if the content type carries no boundary.
    """
    try:
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install scribble[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise UnsupportedFormEncoding(msg)

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    parser.write(body)
    parser.finalize()
    return FormData(collector.fields, collector.files)
