# runners/__init__.py
