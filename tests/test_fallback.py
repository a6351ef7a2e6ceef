import pytest
from urllist.services.fallback import FallbackSynthesizer, humanize_segment
from urllist.services.url_parser import URLParser


class TestFallbackSynthesizer:
    """Unit tests for FallbackSynthesizer"""

    def setup_method(self):
        self.parser = URLParser()
        self.synthesizer = FallbackSynthesizer(
            favicon_service_url="https://icons.example.net/?domain={domain}&sz=32"
        )

    def synthesize(self, url):
        return self.synthesizer.synthesize(url, self.parser.parse(url))

    def test_path_humanization(self):
        """Test that the last path segment becomes a readable title."""
        # Act
        result = self.synthesize("https://example.com/my-cool_article.html")

        # Assert
        assert result.title == "My Cool Article"
        assert result.description == "Visit example.com/my-cool_article.html"

    @pytest.mark.parametrize("url", ["https://example.com", "https://example.com/"])
    def test_root_path(self, url):
        """Test that a bare domain uses the domain as title."""
        # Act
        result = self.synthesize(url)

        # Assert
        assert result.title == "example.com"
        assert result.description == "Visit example.com"

    def test_every_required_field_is_filled(self):
        # Act
        result = self.synthesize("https://news.example.org/2024/05/")

        # Assert
        assert result.url == "https://news.example.org/2024/05/"
        assert result.title == "05"
        assert result.domain == "news.example.org"
        assert result.site_name == "news.example.org"
        assert result.favicon == "https://icons.example.net/?domain=news.example.org&sz=32"
        assert result.description == "Visit news.example.org/2024/05/"

    def test_segment_that_humanizes_to_nothing(self):
        """Test that a dot-file segment falls back to the domain."""
        result = self.synthesize("https://example.com/.well-known")

        assert result.title == "example.com"

    def test_default_favicon_service(self):
        synthesizer = FallbackSynthesizer()

        assert synthesizer.favicon_for("example.com") == "https://www.google.com/s2/favicons?domain=example.com&sz=32"

    def test_long_title_is_truncated(self):
        result = self.synthesize("https://example.com/" + "a" * 250)

        assert len(result.title) == 200


@pytest.mark.parametrize("segment,expected", [
    ("my-cool_article.html", "My Cool Article"),
    ("hello-world", "Hello World"),
    ("report.final.pdf", "Report.Final"),
    ("caf%C3%A9-menu", "Café Menu"),
    ("already Spaced", "Already Spaced"),
])
def test_humanize_segment(segment, expected):
    assert humanize_segment(segment) == expected
