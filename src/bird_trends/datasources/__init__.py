"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # URLs, constants, page fetcher
    ├── models.py         # Dataclasses for extracted records
    └── {feature}.py      # Pure parsing helpers (no I/O)

Currently one source: ``ebird/`` (region bird-list pages).

Fetching and parsing are kept apart on purpose: ``client.fetch_region_page``
is the only function that touches the network, and everything downstream
takes the raw markup string. Tests feed synthetic markup straight into
``extract.extract_records``.
"""
