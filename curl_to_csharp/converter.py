"""Converter - assembles encoder output into the final statement tree.

The converter owns every ordering and nesting decision:

    [handler configuration]                      top level, optional
    using (var httpClient = new HttpClient(...)) one client scope
        using (var request = ...)                one or more request scopes
            headers -> basic auth -> body -> send

Multiple request scopes only occur for upload files, one per file. Each scope
is built with its own URL up front rather than patched after construction.
"""

from __future__ import annotations

from dataclasses import dataclass

from curl_to_csharp.encoders import (
    HANDLER_VARIABLE,
    HTTP_CLIENT_VARIABLE,
    REQUEST_VARIABLE,
    RESPONSE_VARIABLE,
    encode_basic_auth,
    encode_handler,
    encode_headers,
    encode_multipart_body,
    encode_string_body,
    encode_upload_body,
    proxy_warnings,
)
from curl_to_csharp.models import CurlOptions
from curl_to_csharp.syntax import (
    ScopedBlock,
    Statement,
    await_,
    declare,
    invoke,
    literal,
    new,
    scoped,
)


@dataclass(frozen=True)
class ConversionResult:
    """Statements to render plus non-fatal warnings, in the order produced."""

    statements: tuple[Statement, ...]
    warnings: tuple[str, ...] = ()

    @property
    def client_scope(self) -> ScopedBlock:
        """The HttpClient scope (always the last top-level statement)."""
        return self.statements[-1]

    @property
    def request_scopes(self) -> tuple[ScopedBlock, ...]:
        return self.client_scope.body


def needs_handler(options: CurlOptions) -> bool:
    """True if cookies or a supported proxy require an HttpClientHandler."""
    return options.has_cookies or options.has_supported_proxy


def create_send_statement() -> Statement:
    """var response = await httpClient.SendAsync(request);"""
    return declare(
        RESPONSE_VARIABLE,
        await_(invoke(HTTP_CLIENT_VARIABLE, "SendAsync", args=(REQUEST_VARIABLE,))),
    )


def create_request_scope(
    options: CurlOptions,
    url: str,
    body: list[Statement],
) -> ScopedBlock:
    """using (var request = new HttpRequestMessage(new HttpMethod(method), url)) { body; send }"""
    return scoped(
        REQUEST_VARIABLE,
        "HttpRequestMessage",
        (new("HttpMethod", literal(options.method)), literal(url)),
        [*body, create_send_statement()],
    )


def create_request_scopes(options: CurlOptions) -> list[ScopedBlock]:
    """Build every request scope, choosing the body source by priority.

    Priority: data files (multipart) > non-blank payload > upload files.
    Only upload files produce more than one scope.
    """
    base = encode_headers(options) + encode_basic_auth(options)

    if options.data_files:
        return [create_request_scope(options, options.url, base + encode_multipart_body(options))]

    if options.payload and options.payload.strip():
        return [create_request_scope(options, options.url, base + encode_string_body(options))]

    if options.upload_files:
        # A trailing '/' tells curl the URL names a directory, so the local
        # file name becomes the remote one. Otherwise every upload targets
        # the same URL.
        append_file_name = options.path_and_query.endswith("/")
        scopes = []
        for file in options.upload_files:
            url = options.url_for_file_upload(file) if append_file_name else options.url
            scopes.append(create_request_scope(options, url, base + encode_upload_body(file)))
        return scopes

    return [create_request_scope(options, options.url, base)]


def convert(options: CurlOptions) -> ConversionResult:
    """Convert parsed curl options into a C# HttpClient statement tree.

    Never raises for a valid option model. An unsupported proxy scheme is
    reported in ConversionResult.warnings and the proxy is left out.
    """
    statements: list[Statement] = []

    if needs_handler(options):
        handler_statements, warnings = encode_handler(options)
        statements.extend(handler_statements)
        client_args = (HANDLER_VARIABLE,)
    else:
        warnings = proxy_warnings(options)
        client_args = ()

    client_scope = scoped(
        HTTP_CLIENT_VARIABLE,
        "HttpClient",
        client_args,
        create_request_scopes(options),
    )
    statements.append(client_scope)

    return ConversionResult(statements=tuple(statements), warnings=tuple(warnings))
