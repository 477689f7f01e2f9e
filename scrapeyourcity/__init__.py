"""
scrapeyourcity: change-tracked snapshots of Shape Your City Halifax projects.

- scraper: listing discovery, page fetching and canonical extraction
- snapshots: content-addressed store with per-project observation history
- crawler: sequential driver tying the two together
"""

__version__ = "0.1.0"
