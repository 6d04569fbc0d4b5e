# sevasetu/api/__init__.py
