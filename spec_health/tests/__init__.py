# Path: spec_health/tests/__init__.py
