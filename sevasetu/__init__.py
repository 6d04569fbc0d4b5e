# sevasetu/__init__.py
