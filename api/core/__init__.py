"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks every feature uses (DB wiring, schema,
logging, the static client fallback). Keep feature-specific SQL in the
corresponding feature package (`fellows/`, `posts/`).
"""
