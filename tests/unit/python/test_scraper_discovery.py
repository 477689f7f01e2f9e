"""Unit tests for project discovery."""

import pytest

from scrapeyourcity.exceptions import ExtractionError
from scrapeyourcity.scraper.discovery import discover_projects, select_projects
from scrapeyourcity.scraper.models import DEFAULT_DENYLIST, LISTING_URL, DiscoveredProject
from tests.fixtures.project_pages import LISTING_PAGE

SITE = "https://www.shapeyourcityhalifax.ca"


class TestDiscoverProjects:
    """Tests for discover_projects function."""

    def test_finds_tiles_in_order(self):
        projects = discover_projects(LISTING_PAGE, LISTING_URL)
        assert [p.url for p in projects] == [
            f"{SITE}/shape-your-city-halifax",
            f"{SITE}/bike-lanes",
            f"{SITE}/park-plan",
        ]

    def test_reads_state(self):
        projects = discover_projects(LISTING_PAGE, LISTING_URL)
        assert [p.state for p in projects] == ["published", "published", "archived"]

    def test_skips_tiles_without_link(self):
        projects = discover_projects(LISTING_PAGE, LISTING_URL)
        assert len(projects) == 3

    def test_missing_state_is_empty(self):
        html = '<div class="project-tile"><a class="project-tile__link" href="/x">X</a></div>'
        [project] = discover_projects(html, LISTING_URL)
        assert project == DiscoveredProject(url=f"{SITE}/x", state="")

    def test_no_tiles_raises(self):
        with pytest.raises(ExtractionError):
            discover_projects("<html><body>Down for maintenance</body></html>", LISTING_URL)


class TestSelectProjects:
    """Tests for select_projects function."""

    @pytest.fixture
    def discovered(self):
        return discover_projects(LISTING_PAGE, LISTING_URL)

    def test_all_without_allow_list(self, discovered):
        selected = select_projects(discovered)
        assert [p.url for p in selected] == [f"{SITE}/bike-lanes", f"{SITE}/park-plan"]

    def test_empty_allow_list_means_all(self, discovered):
        assert select_projects(discovered, []) == select_projects(discovered, None)

    def test_allow_list_intersection(self, discovered):
        selected = select_projects(discovered, [f"{SITE}/park-plan", f"{SITE}/not-listed"])
        assert [p.url for p in selected] == [f"{SITE}/park-plan"]

    def test_denylist_beats_allow_list(self, discovered):
        selected = select_projects(discovered, [f"{SITE}/shape-your-city-halifax"])
        assert selected == []

    def test_default_denylist(self):
        assert f"{SITE}/shape-your-city-halifax" in DEFAULT_DENYLIST

    def test_custom_denylist(self, discovered):
        selected = select_projects(discovered, denylist={f"{SITE}/bike-lanes"})
        assert [p.url for p in selected] == [
            f"{SITE}/shape-your-city-halifax",
            f"{SITE}/park-plan",
        ]

    def test_preserves_duplicates(self):
        project = DiscoveredProject(url=f"{SITE}/x", state="published")
        assert select_projects([project, project]) == [project, project]
