"""searchview - Search Result Presentation Layer.

Maps search-result documents onto escaped HTML fragments for a web search UI:
- Field configuration (highlighting, accessors, defaults, separators)
- Document presenter (headings, field values, link-to-search, helpers)
- FastAPI host routes for show pages and index entries
"""

__version__ = "0.1.0"
