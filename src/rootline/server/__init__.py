"""
rootline.server - Live lineage view over HTTP

Re-reads the table whenever it changes on disk and serves the
recomputed diagram and JSON. The Flask app lives in rootline.server.app.
"""

from rootline.server.watcher import TableWatcher

__all__ = ["TableWatcher"]
