"""Unit tests for scraper data models."""

import dataclasses

import pytest

from scrapeyourcity.scraper import (
    LISTING_URL,
    ExtractionRules,
    ProjectSnapshot,
    ScrapeConfig,
)


class TestScrapeConfig:
    """Tests for ScrapeConfig dataclass."""

    def test_defaults(self):
        config = ScrapeConfig()
        assert config.db_path == "data.db"
        assert config.listing_url == LISTING_URL
        assert config.only_urls == []
        assert config.request_delay_ms == 1000
        assert config.continue_on_error is False

    def test_round_trip(self):
        config = ScrapeConfig(
            db_path="/tmp/x.db",
            only_urls=["https://example.com/a"],
            request_delay_ms=250,
            timeout=5.0,
            continue_on_error=True,
            headers={"X-Test": "1"},
        )
        assert ScrapeConfig.from_dict(config.to_dict()) == config

    def test_from_empty_dict(self):
        assert ScrapeConfig.from_dict({}) == ScrapeConfig()


class TestExtractionRules:
    """Tests for ExtractionRules dataclass."""

    def test_default_rules_cover_site_noise(self):
        rules = ExtractionRules()
        assert "script" in rules.remove_selectors
        assert "input[name=authenticity_token]" in rules.remove_selectors
        assert ("input", "id") in rules.strip_attributes
        assert ("a", "href") in rules.absolutize_attributes

    def test_rules_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ExtractionRules().content_selector = "main"

    def test_rules_are_replaceable(self):
        rules = dataclasses.replace(ExtractionRules(), content_selector="main")
        assert rules.content_selector == "main"
        assert rules.title_selector == "h1"


class TestProjectSnapshot:
    """Tests for ProjectSnapshot dataclass."""

    def test_equality_by_value(self):
        a = ProjectSnapshot(url="u", title="t", state="s", html="<p>x</p>")
        b = ProjectSnapshot(url="u", title="t", state="s", html="<p>x</p>")
        assert a == b
