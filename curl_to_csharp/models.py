"""Request option model for curl-to-csharp.

The option model is the normalized form of a parsed curl invocation. Uses
Pydantic v2.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator


CONTENT_TYPE_HEADER = "Content-Type"
SUPPORTED_PROXY_SCHEMES = frozenset({"http", "https"})


def _normalize_absolute_uri(value: str, field_name: str) -> str:
    """Require scheme and host; give an empty path the root path.

    The fragment is dropped: curl never sends it, and a file name appended
    for an upload must land on the path.
    """
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"{field_name} must be an absolute URI, got '{value}'")
    parts = parts._replace(fragment="")
    if not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


def _split_comma_separated(value: str) -> list[str]:
    """Split a header value on commas that are not inside double quotes."""
    items: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in value:
        if char == '"':
            in_quotes = not in_quotes
        if char == "," and not in_quotes:
            items.append("".join(current))
            current = []
            continue
        current.append(char)
    items.append("".join(current))
    return [item.strip() for item in items if item.strip()]


class CurlOptions(BaseModel):
    """One parsed curl invocation.

    Header values are arrays to support repeated headers. Body sources are
    checked in priority order by the converter: data_files, then payload,
    then upload_files.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    method: str = Field(default="GET", description="HTTP method token, e.g. GET")
    url: str = Field(description="Absolute request URI")
    headers: dict[str, list[str]] = Field(
        default_factory=dict, description="Request headers (arrays for repeated headers)"
    )
    payload: str | None = Field(default=None, description="String body (-d/--data)")
    data_files: list[str] = Field(
        default_factory=list, alias="dataFiles", description="Files embedded as multipart parts"
    )
    upload_files: list[str] = Field(
        default_factory=list, alias="uploadFiles", description="Files sent as raw bodies, one request each"
    )
    cookie_value: str | None = Field(
        default=None, alias="cookieValue", description="Value for the Cookie header"
    )
    proxy_uri: str | None = Field(default=None, alias="proxyUri", description="Proxy target URI")
    user_password_pair: str | None = Field(
        default=None, alias="userPasswordPair", description="Basic auth credentials as user:password"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _normalize_absolute_uri(v, "url")

    @field_validator("proxy_uri")
    @classmethod
    def validate_proxy_uri(cls, v: str | None) -> str | None:
        if not v:
            return v
        return _normalize_absolute_uri(v, "proxy_uri")

    @field_validator("headers", mode="before")
    @classmethod
    def wrap_single_header_values(cls, v: Any) -> Any:
        # A header given once may be written as a plain string
        if isinstance(v, dict):
            return {k: [val] if isinstance(val, str) else val for k, val in v.items()}
        return v

    @property
    def has_cookies(self) -> bool:
        return bool(self.cookie_value)

    @property
    def has_proxy(self) -> bool:
        return bool(self.proxy_uri)

    @property
    def proxy_scheme(self) -> str | None:
        if not self.proxy_uri:
            return None
        return urlsplit(self.proxy_uri).scheme.lower()

    @property
    def has_supported_proxy(self) -> bool:
        return self.has_proxy and self.proxy_scheme in SUPPORTED_PROXY_SCHEMES

    @property
    def path_and_query(self) -> str:
        parts = urlsplit(self.url)
        if parts.query:
            return f"{parts.path}?{parts.query}"
        return parts.path

    def header_values(self, name: str) -> list[str]:
        """All values of a header, matching the name case-insensitively."""
        wanted = name.lower()
        values: list[str] = []
        for key, header_values in self.headers.items():
            if key.lower() == wanted:
                values.extend(header_values)
        return values

    def get_comma_separated_values(self, name: str) -> list[str]:
        """Every comma-separated item across all values of a header."""
        items: list[str] = []
        for value in self.header_values(name):
            items.extend(_split_comma_separated(value))
        return items

    def url_for_file_upload(self, file: str) -> str:
        """The request URL with the file's base name appended.

        Only meaningful when the URL path ends with '/', which tells curl the
        last segment is a directory and the local file name should be used.
        """
        file_name = file.replace("\\", "/").rsplit("/", 1)[-1]
        return f"{self.url}{file_name}"
