"""Tests for the GitHub contents client."""

import base64

import httpx
import pytest

from conftest import REPO, encode
from gh import FetchError, GitHubFileContent, decode_content


class TestListFiles:
    def test_keeps_only_files(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents", [
            {"path": "policy1.rego", "type": "file"},
            {"path": "lib", "type": "dir"},
            {"path": "readme.md", "type": "file"},
        ])
        assert github.list_files("octo", "policies") == ["policy1.rego", "readme.md"]

    def test_sends_token_header(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents", [])
        github.list_files("octo", "policies")
        assert service.requests[0].headers["Authorization"] == "token ghp_token"

    def test_non_200_status(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents", {"message": "Bad credentials"}, status=401)
        with pytest.raises(FetchError) as exc_info:
            github.list_files("octo", "policies")
        assert exc_info.value.status_code == 401

    def test_malformed_json(self, service, github) -> None:
        service.add("GET", f"{REPO}/contents", lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(FetchError, match="malformed JSON"):
            github.list_files("octo", "policies")

    def test_unexpected_shape(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents", {"path": "policy1.rego", "type": "file"})
        with pytest.raises(FetchError, match="unexpected listing format"):
            github.list_files("octo", "policies")

    def test_transport_failure(self, service, github) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service.add("GET", f"{REPO}/contents", refuse)
        with pytest.raises(FetchError, match="request failed"):
            github.list_files("octo", "policies")


class TestGetFileContent:
    def test_decodes_base64(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents/foo.rego", {
            "content": "cGFja2FnZSBmb28=",
            "encoding": "base64",
        })
        assert github.get_file_content("octo", "policies", "foo.rego") == b"package foo"

    def test_plain_content_passes_through(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents/foo.rego", {"content": "package foo", "encoding": ""})
        assert github.get_file_content("octo", "policies", "foo.rego") == b"package foo"

    def test_not_found(self, github) -> None:
        with pytest.raises(FetchError) as exc_info:
            github.get_file_content("octo", "policies", "missing.rego")
        assert exc_info.value.status_code == 404
        assert exc_info.value.path == "missing.rego"

    def test_invalid_base64(self, service, github) -> None:
        service.json("GET", f"{REPO}/contents/foo.rego", {"content": "!!!", "encoding": "base64"})
        with pytest.raises(FetchError, match="invalid base64"):
            github.get_file_content("octo", "policies", "foo.rego")


def test_decode_base64_with_line_breaks() -> None:
    text = "package foo\n\ndeny[msg] {\n  input.kind == \"Pod\"\n  msg := \"no pods\"\n}\n"
    wrapped = encode(text)
    wrapped = "\n".join(wrapped[i:i + 60] for i in range(0, len(wrapped), 60)) + "\n"
    item = GitHubFileContent(content=wrapped, encoding="base64")
    assert decode_content(item) == text.encode("utf-8")


def test_decode_exact_bytes() -> None:
    raw = bytes(range(256))
    item = GitHubFileContent(content=base64.b64encode(raw).decode("ascii"), encoding="base64")
    assert decode_content(item) == raw
