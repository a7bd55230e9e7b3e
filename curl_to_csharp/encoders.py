"""Feature encoders - one per curl feature.

Each encoder reads the option model and returns a fresh list of statements.
Encoders never look at each other's output; ordering and nesting are decided
by the converter.
"""

from __future__ import annotations

from curl_to_csharp.models import CONTENT_TYPE_HEADER, CurlOptions
from curl_to_csharp.syntax import (
    BooleanLiteral,
    Expression,
    InterpolatedString,
    ObjectCreation,
    Statement,
    assign,
    call,
    declare,
    ident,
    invoke,
    literal,
    member,
    new,
)


REQUEST_VARIABLE = "request"
HTTP_CLIENT_VARIABLE = "httpClient"
HANDLER_VARIABLE = "handler"
BASE64_AUTHORIZATION_VARIABLE = "base64authorization"
MULTIPART_VARIABLE = "multipartContent"
RESPONSE_VARIABLE = "response"
REQUEST_CONTENT_PROPERTY = "Content"


def _try_add_header(name: str, value: Expression) -> Statement:
    return call(
        REQUEST_VARIABLE,
        "Headers",
        "TryAddWithoutValidation",
        args=(literal(name), value),
    )


def _string_content(options: CurlOptions) -> ObjectCreation:
    """new StringContent(payload[, Encoding.UTF8, "<content type>"])"""
    args = [literal(options.payload or "")]
    content_types = options.get_comma_separated_values(CONTENT_TYPE_HEADER)
    if content_types:
        args.append(member("Encoding", "UTF8"))
        args.append(literal(content_types[0]))
    return new("StringContent", *args)


def _byte_array_content(file: str) -> ObjectCreation:
    """new ByteArrayContent(File.ReadAllBytes("<file>"))"""
    return new("ByteArrayContent", invoke("File", "ReadAllBytes", args=(literal(file),)))


def encode_headers(options: CurlOptions) -> list[Statement]:
    """One TryAddWithoutValidation call per header, plus Cookie.

    Content-Type is skipped: it belongs to the request content, not the
    request headers.
    """
    statements: list[Statement] = []
    for name in options.headers:
        if name.lower() == CONTENT_TYPE_HEADER.lower():
            continue
        statements.append(_try_add_header(name, literal(",".join(options.headers[name]))))

    if options.has_cookies:
        statements.append(_try_add_header("Cookie", literal(options.cookie_value)))

    return statements


def encode_basic_auth(options: CurlOptions) -> list[Statement]:
    """Base64 the user:password pair and send it as a Basic Authorization header."""
    if not options.user_password_pair:
        return []

    ascii_bytes = invoke(
        "Encoding", "ASCII", "GetBytes", args=(literal(options.user_password_pair),)
    )
    encoded = invoke("Convert", "ToBase64String", args=(ascii_bytes,))
    header_value = InterpolatedString(("Basic ", ident(BASE64_AUTHORIZATION_VARIABLE)))
    return [
        declare(BASE64_AUTHORIZATION_VARIABLE, encoded),
        _try_add_header("Authorization", header_value),
    ]


def encode_string_body(options: CurlOptions) -> list[Statement]:
    return [assign(REQUEST_VARIABLE, REQUEST_CONTENT_PROPERTY, _string_content(options))]


def encode_multipart_body(options: CurlOptions) -> list[Statement]:
    """Multipart container: payload part first, then one part per data file."""
    statements: list[Statement] = [declare(MULTIPART_VARIABLE, new("MultipartContent"))]

    if options.payload:
        statements.append(call(MULTIPART_VARIABLE, "Add", args=(_string_content(options),)))

    for file in options.data_files:
        statements.append(call(MULTIPART_VARIABLE, "Add", args=(_byte_array_content(file),)))

    statements.append(assign(REQUEST_VARIABLE, REQUEST_CONTENT_PROPERTY, ident(MULTIPART_VARIABLE)))
    return statements


def encode_upload_body(file: str) -> list[Statement]:
    return [assign(REQUEST_VARIABLE, REQUEST_CONTENT_PROPERTY, _byte_array_content(file))]


def proxy_warnings(options: CurlOptions) -> list[str]:
    """Warnings for a requested proxy that cannot be expressed."""
    if options.has_proxy and not options.has_supported_proxy:
        return [f'Proxy scheme "{options.proxy_scheme}" is not supported']
    return []


def encode_handler(options: CurlOptions) -> tuple[list[Statement], list[str]]:
    """Declare and configure the HttpClientHandler.

    Returns:
        Tuple of (statements, warnings). An unsupported proxy scheme produces
        a warning and no proxy assignment; cookie configuration is unaffected.
    """
    statements: list[Statement] = [declare(HANDLER_VARIABLE, new("HttpClientHandler"))]

    if options.has_cookies:
        statements.append(assign(HANDLER_VARIABLE, "UseCookies", BooleanLiteral(False)))

    if options.has_supported_proxy:
        statements.append(
            assign(HANDLER_VARIABLE, "Proxy", new("WebProxy", literal(options.proxy_uri)))
        )

    return statements, proxy_warnings(options)
