"""
API server package — HTTP/REST interface over the detection engine.

Accepts account uploads, runs batch and single-account scoring, and serves
dashboard data and CSV exports. Holds no global state: each app built by
create_app() owns its own store.
"""
