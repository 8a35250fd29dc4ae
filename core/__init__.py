"""
story-search core package.

Modules
───────
models    — Pydantic data models (Query, ResultItem, ResultState, SortSpec, SessionView)
urls      — search URL encoding / decoding
history   — recent-search shortcuts derived from the query log
results   — reducer over ResultState (fetch lifecycle, item removal)
sorting   — stable sort-then-reverse over the result list
client    — httpx transport for the story search API, in-memory demo transport
storage   — SQLite-backed key/value store for the last search term
session   — SearchSession orchestrating all of the above
"""
