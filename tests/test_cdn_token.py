"""Tests for the BunnyCDN token generator."""
import base64
import hashlib

import pytest

from app.cdn.errors import InvalidInputError
from app.cdn.token import build_parameter_string, generate_token

SECRET = "s3cret"
EXPIRES = 1700000300


def reference_token(signature_base: str) -> str:
    digest = hashlib.sha256(signature_base.encode("utf-8")).digest()
    b64 = base64.b64encode(digest).decode("ascii")
    return b64.replace("+", "-").replace("/", "_").rstrip("=")


class TestGenerateToken:
    def test_end_to_end_example(self):
        result = generate_token("/folder/file.webp?width=800&height=600", SECRET, EXPIRES)

        expected_base = "s3cret" + "/folder/file.webp" + "1700000300" + "" + "height=600&width=800"
        assert result.parameter_string == "height=600&width=800"
        assert result.token == reference_token(expected_base)
        assert result.expires == EXPIRES

    def test_deterministic(self):
        first = generate_token("/a/b.webp?width=10", SECRET, EXPIRES)
        second = generate_token("/a/b.webp?width=10", SECRET, EXPIRES)
        assert first == second

    def test_parameter_order_independent(self):
        a = generate_token("/x?b=2&a=1", SECRET, EXPIRES)
        b = generate_token("/x?a=1&b=2", SECRET, EXPIRES)
        assert a.token == b.token
        assert a.parameter_string == "a=1&b=2"

    def test_empty_values_are_skipped(self):
        with_empty = generate_token("/x?a=&b=2", SECRET, EXPIRES)
        without = generate_token("/x?b=2", SECRET, EXPIRES)
        assert with_empty.token == without.token
        assert with_empty.parameter_string == "b=2"

    def test_zero_is_significant(self):
        zero = generate_token("/x?width=0", SECRET, EXPIRES)
        bare = generate_token("/x", SECRET, EXPIRES)
        assert zero.parameter_string == "width=0"
        assert zero.token != bare.token

    def test_token_is_url_safe(self):
        # Enough variety that "+", "/" and "=" would show up in plain base64
        for i in range(64):
            token = generate_token(f"/folder/{i}.webp?width={i}", SECRET, EXPIRES + i).token
            assert "+" not in token
            assert "/" not in token
            assert "=" not in token
            assert len(token) == 43

    def test_signature_uses_decoded_pathname(self):
        result = generate_token("/my%20folder/file.webp", SECRET, EXPIRES)
        assert result.token == reference_token("s3cret/my folder/file.webp1700000300")

    def test_relative_path_is_resolved(self):
        assert (
            generate_token("folder/file.webp", SECRET, EXPIRES).token
            == generate_token("/folder/file.webp", SECRET, EXPIRES).token
        )

    def test_different_expiry_changes_token(self):
        assert (
            generate_token("/x", SECRET, EXPIRES).token
            != generate_token("/x", SECRET, EXPIRES + 1).token
        )

    def test_client_ip_goes_between_expiry_and_params(self):
        result = generate_token("/x?w=1", SECRET, EXPIRES, client_ip="203.0.113.7")
        assert result.token == reference_token("s3cret/x1700000300203.0.113.7w=1")


class TestRestrictions:
    def test_path_override_replaces_signature_path(self):
        result = generate_token("/folder/file.webp", SECRET, EXPIRES, path_override="/folder/")
        assert result.parameter_string == "token_path=/folder/"
        assert result.token == reference_token("s3cret/folder/1700000300token_path=/folder/")

    def test_path_override_keeps_display_params_signed(self):
        # width/height stay in the parameter string; token_path only swaps the signature path
        result = generate_token(
            "/folder/file.webp?width=800&height=600",
            SECRET,
            EXPIRES,
            path_override="/folder/",
        )
        assert result.parameter_string == "height=600&token_path=/folder/&width=800"
        assert result.token == reference_token(
            "s3cret/folder/1700000300height=600&token_path=/folder/&width=800"
        )

    def test_path_override_replaces_existing_token_path_param(self):
        result = generate_token("/x?token_path=/old/", SECRET, EXPIRES, path_override="/new/")
        assert result.parameter_string == "token_path=/new/"

    def test_country_restrictions_are_signed(self):
        result = generate_token(
            "/x", SECRET, EXPIRES, countries_allowed="NL,BE", countries_blocked="US"
        )
        assert result.parameter_string == "token_countries=NL,BE&token_countries_blocked=US"
        assert dict(result.params) == {
            "token_countries": "NL,BE",
            "token_countries_blocked": "US",
        }


class TestParameterString:
    def test_sorted_by_key(self):
        text, kept = build_parameter_string([("width", "1"), ("class", "t"), ("height", "2")])
        assert text == "class=t&height=2&width=1"
        assert kept == (("class", "t"), ("height", "2"), ("width", "1"))

    def test_empty_input(self):
        assert build_parameter_string([]) == ("", ())


@pytest.mark.parametrize("bad", ["", "   ", None, 42, "http://[::1", "/a\ud800.webp"])
def test_invalid_paths_raise(bad):
    with pytest.raises(InvalidInputError):
        generate_token(bad, SECRET, EXPIRES)
