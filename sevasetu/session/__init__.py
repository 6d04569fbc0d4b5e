# sevasetu/session/__init__.py
