# sevasetu/services/__init__.py
