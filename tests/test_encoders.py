"""Tests for curl_to_csharp.encoders.

Each encoder is tested in isolation against the option model.

Tests cover:
- Header encoder: Content-Type skipping, comma joining, Cookie header
- Basic-auth encoder: base64 declaration and Authorization header
- String, multipart and upload body encoders
- Handler encoder: cookies, supported and unsupported proxies
"""

from curl_to_csharp.encoders import (
    encode_basic_auth,
    encode_handler,
    encode_headers,
    encode_multipart_body,
    encode_string_body,
    encode_upload_body,
    proxy_warnings,
)
from curl_to_csharp.syntax import (
    Assignment,
    BooleanLiteral,
    Declaration,
    ExpressionCall,
    Identifier,
    InterpolatedString,
    Invocation,
    MemberAccess,
    ObjectCreation,
    StringLiteral,
)
from tests.conftest import header_names, make_curl_options


def _byte_array_content(file: str) -> ObjectCreation:
    return ObjectCreation(
        "ByteArrayContent",
        (Invocation(Identifier("File"), ("ReadAllBytes",), (StringLiteral(file),)),),
    )


# =============================================================================
# Header Encoder Tests
# =============================================================================


class TestEncodeHeaders:
    def test_no_headers_no_cookies(self):
        assert encode_headers(make_curl_options()) == []

    def test_one_statement_per_header(self):
        options = make_curl_options(headers={"Accept": "application/json", "User-Agent": "curl/8.0"})
        statements = encode_headers(options)

        assert len(statements) == 2
        assert statements[0] == ExpressionCall(
            Identifier("request"),
            ("Headers", "TryAddWithoutValidation"),
            (StringLiteral("Accept"), StringLiteral("application/json")),
        )
        assert header_names(tuple(statements)) == ["Accept", "User-Agent"]

    def test_repeated_header_values_comma_joined(self):
        options = make_curl_options(headers={"Accept": ["text/plain", "text/html"]})
        (statement,) = encode_headers(options)
        assert statement.args[1] == StringLiteral("text/plain,text/html")

    def test_content_type_skipped(self):
        options = make_curl_options(headers={"Content-Type": "application/json", "Accept": "*/*"})
        assert header_names(tuple(encode_headers(options))) == ["Accept"]

    def test_content_type_skipped_case_insensitive(self):
        options = make_curl_options(headers={"content-type": "application/json"})
        assert encode_headers(options) == []

    def test_cookie_header_appended_last(self):
        options = make_curl_options(headers={"Accept": "*/*"}, cookie_value="session=abc")
        statements = encode_headers(options)

        assert header_names(tuple(statements)) == ["Accept", "Cookie"]
        assert statements[-1].args[1] == StringLiteral("session=abc")

    def test_cookie_only(self):
        options = make_curl_options(cookie_value="a=1")
        assert header_names(tuple(encode_headers(options))) == ["Cookie"]


# =============================================================================
# Basic-Auth Encoder Tests
# =============================================================================


class TestEncodeBasicAuth:
    def test_no_credentials(self):
        assert encode_basic_auth(make_curl_options()) == []
        assert encode_basic_auth(make_curl_options(user_password_pair="")) == []

    def test_declaration_then_header(self):
        declaration, header = encode_basic_auth(make_curl_options(user_password_pair="user:secret"))

        assert declaration == Declaration(
            "base64authorization",
            Invocation(
                Identifier("Convert"),
                ("ToBase64String",),
                (
                    Invocation(
                        Identifier("Encoding"),
                        ("ASCII", "GetBytes"),
                        (StringLiteral("user:secret"),),
                    ),
                ),
            ),
        )
        assert header.args == (
            StringLiteral("Authorization"),
            InterpolatedString(("Basic ", Identifier("base64authorization"))),
        )


# =============================================================================
# Body Encoder Tests
# =============================================================================


class TestEncodeStringBody:
    def test_payload_without_content_type(self):
        (statement,) = encode_string_body(make_curl_options(payload="hello"))
        assert statement == Assignment(
            Identifier("request"),
            "Content",
            ObjectCreation("StringContent", (StringLiteral("hello"),)),
        )

    def test_payload_with_content_type(self):
        options = make_curl_options(
            payload='{"a":1}', headers={"Content-Type": "application/json"}
        )
        (statement,) = encode_string_body(options)
        assert statement.value == ObjectCreation(
            "StringContent",
            (
                StringLiteral('{"a":1}'),
                MemberAccess(Identifier("Encoding"), "UTF8"),
                StringLiteral("application/json"),
            ),
        )

    def test_first_content_type_value_used(self):
        options = make_curl_options(
            payload="x", headers={"Content-Type": "text/plain, application/json"}
        )
        (statement,) = encode_string_body(options)
        assert statement.value.args[-1] == StringLiteral("text/plain")


class TestEncodeMultipartBody:
    def test_payload_and_files(self):
        options = make_curl_options(payload="x", data_files=["f1.txt", "f2.txt"])
        statements = encode_multipart_body(options)

        assert statements[0] == Declaration("multipartContent", ObjectCreation("MultipartContent"))
        assert statements[1] == ExpressionCall(
            Identifier("multipartContent"),
            ("Add",),
            (ObjectCreation("StringContent", (StringLiteral("x"),)),),
        )
        assert statements[2].args == (_byte_array_content("f1.txt"),)
        assert statements[3].args == (_byte_array_content("f2.txt"),)
        assert statements[4] == Assignment(
            Identifier("request"), "Content", Identifier("multipartContent")
        )
        assert len(statements) == 5

    def test_files_only(self):
        statements = encode_multipart_body(make_curl_options(data_files=["f1.txt"]))
        assert [type(s) for s in statements] == [Declaration, ExpressionCall, Assignment]

    def test_whitespace_payload_still_added_as_part(self):
        statements = encode_multipart_body(make_curl_options(payload=" ", data_files=["f1.txt"]))
        assert len(statements) == 4


class TestEncodeUploadBody:
    def test_byte_array_assignment(self):
        assert encode_upload_body("a.bin") == [
            Assignment(Identifier("request"), "Content", _byte_array_content("a.bin"))
        ]


# =============================================================================
# Handler Encoder Tests
# =============================================================================


class TestEncodeHandler:
    def test_cookies_disable_cookie_container(self):
        statements, warnings = encode_handler(make_curl_options(cookie_value="a=1"))

        assert statements == [
            Declaration("handler", ObjectCreation("HttpClientHandler")),
            Assignment(Identifier("handler"), "UseCookies", BooleanLiteral(False)),
        ]
        assert warnings == []

    def test_supported_proxy(self):
        statements, warnings = encode_handler(make_curl_options(proxy_uri="https://proxy:8443/"))

        assert statements[-1] == Assignment(
            Identifier("handler"),
            "Proxy",
            ObjectCreation("WebProxy", (StringLiteral("https://proxy:8443/"),)),
        )
        assert warnings == []

    def test_cookies_and_proxy(self):
        statements, _ = encode_handler(
            make_curl_options(cookie_value="a=1", proxy_uri="http://proxy/")
        )
        assert [getattr(s, "member", None) for s in statements] == [None, "UseCookies", "Proxy"]

    def test_unsupported_proxy_warns_and_omits_proxy(self):
        statements, warnings = encode_handler(
            make_curl_options(cookie_value="a=1", proxy_uri="ftp://proxy/")
        )

        assert all(getattr(s, "member", None) != "Proxy" for s in statements)
        assert warnings == ['Proxy scheme "ftp" is not supported']


class TestProxyWarnings:
    def test_no_proxy(self):
        assert proxy_warnings(make_curl_options()) == []

    def test_http_proxy(self):
        assert proxy_warnings(make_curl_options(proxy_uri="http://proxy/")) == []

    def test_socks_proxy(self):
        assert proxy_warnings(make_curl_options(proxy_uri="socks5://proxy:1080/")) == [
            'Proxy scheme "socks5" is not supported'
        ]
