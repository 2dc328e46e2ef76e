# taskboard/lib/__init__.py
