"""Tests for rewriting stored file URLs onto the CDN."""
import pytest

from app.domain.files import CdnUrlRewriter, normalize_cdn_base, rewrite_file_url

CDN = "cdn.example.com"
API = "api.example.com"

SAMPLES = [
    "",
    "/",
    "//",
    "?q=1",
    "#top",
    "   ",
    "img.png",
    "/uploads/img.png",
    "uploads/img.png",
    "cdn.example.com",
    "cdn.example.com/img.png",
    "/proxy/cdn.example.com/img.png",
    "xcdn.example.comy/img.png",
    "https://cdn.example.com",
    "https://cdn.example.com/img.png",
    "https://cdn.example.com.evil.test/img.png",
    "http://cdn.example.com/img.png",
    "https://api.example.com/cdn.example.com/img.png",
    "https://api.example.com/uploads/img.png",
    "api.example.com/cdn.example.com",
    "//other.test/img.png",
    "https://",
    "://broken",
    "https://other.test/img.png",
    "ftp://files.test/a b.png",
    "ümlaut/ß.png",
]


class TestNormalizeCdnBase:
    def test_bare_domain_gets_https(self):
        assert normalize_cdn_base("cdn.example.com") == "https://cdn.example.com"

    def test_scheme_and_trailing_slash(self):
        assert normalize_cdn_base(" http://cdn.example.com/ ") == "http://cdn.example.com"


class TestRewriteFileUrl:
    def test_no_cdn_leaves_url_alone(self):
        assert rewrite_file_url("/uploads/img.png", None) == "/uploads/img.png"
        assert rewrite_file_url("/uploads/img.png", "  ") == "/uploads/img.png"

    def test_url_already_on_cdn_is_unchanged(self):
        assert rewrite_file_url("https://cdn.example.com/img.png", CDN) == "https://cdn.example.com/img.png"

    def test_api_host_concatenation_is_repaired(self):
        url = "https://api.example.com/cdn.example.com/img.png"
        assert rewrite_file_url(url, CDN, API) == "https://cdn.example.com/img.png"

    def test_api_host_concatenation_needs_api_host(self):
        url = "https://api.example.com/cdn.example.com/img.png"
        assert rewrite_file_url(url, CDN) == url

    def test_relative_url_is_rooted_on_cdn(self):
        assert rewrite_file_url("/uploads/img.png", CDN) == "https://cdn.example.com/uploads/img.png"

    def test_host_relative_url_is_rooted_on_cdn(self):
        assert rewrite_file_url("uploads/img.png", CDN) == "https://cdn.example.com/uploads/img.png"

    def test_scheme_less_cdn_url_gets_scheme(self):
        assert rewrite_file_url("cdn.example.com/img.png", CDN) == "https://cdn.example.com/img.png"

    def test_prefix_before_cdn_domain_is_dropped(self):
        assert rewrite_file_url("/proxy/cdn.example.com/img.png", CDN) == "https://cdn.example.com/img.png"

    def test_foreign_absolute_url_is_unchanged(self):
        assert rewrite_file_url("https://other.test/img.png", CDN) == "https://other.test/img.png"

    def test_protocol_relative_url_is_unchanged(self):
        assert rewrite_file_url("//other.test/img.png", CDN) == "//other.test/img.png"

    def test_empty_url_is_unchanged(self):
        assert rewrite_file_url("", CDN, API) == ""

    def test_cdn_base_with_scheme(self):
        assert rewrite_file_url("/img.png", "http://cdn.example.com/") == "http://cdn.example.com/img.png"

    @pytest.mark.parametrize("url", SAMPLES)
    @pytest.mark.parametrize("api_host", [None, API])
    def test_rewrite_is_idempotent_and_total(self, url, api_host):
        once = rewrite_file_url(url, CDN, api_host)
        assert isinstance(once, str)
        assert rewrite_file_url(once, CDN, api_host) == once

    @pytest.mark.parametrize("url", ["/a.png", "a.png", "cdn.example.com/a.png", "/x/cdn.example.com/a.png"])
    def test_relative_inputs_end_up_on_cdn(self, url):
        assert rewrite_file_url(url, CDN).startswith("https://cdn.example.com/")


class TestCdnUrlRewriter:
    def test_disabled_without_cdn(self):
        rewriter = CdnUrlRewriter()
        assert not rewriter.enabled
        assert rewriter("/uploads/a.png") == "/uploads/a.png"

    def test_rewrites_nested_file_references(self):
        rewriter = CdnUrlRewriter(cdn_base=CDN, api_host=API)
        payload = {
            "title": "Post",
            "url": "/not/a/file",
            "cover": {"id": 1, "name": "cover", "mime": "image/jpeg", "url": "/uploads/cover.jpg"},
            "blocks": [
                {"__component": "shared.slider", "files": [{"id": 2, "mime": "image/png", "url": "/uploads/b.png"}]},
                {"__component": "shared.link", "URL": "/docs"},
            ],
        }

        result = rewriter.rewrite_references(payload)

        assert result["cover"]["url"] == "https://cdn.example.com/uploads/cover.jpg"
        assert result["blocks"][0]["files"][0]["url"] == "https://cdn.example.com/uploads/b.png"
        assert result["url"] == "/not/a/file"
        assert result["blocks"][1] == {"__component": "shared.link", "URL": "/docs"}
        assert payload["cover"]["url"] == "/uploads/cover.jpg"
