"""
Business logic shared by the API routers.

Modules:
    filters: Typed criteria, sort parsing, tier vocabulary and marker/limit slicing
    journalists: Journalist queries across the core and mediamine stores
    resolver: Cross-store relation resolution for pages of journalists
    email_validation: Chunked ZeroBounce validation and result persistence
    zerobounce: Async HTTP client for the ZeroBounce API
    export: CSV serialisation
"""
