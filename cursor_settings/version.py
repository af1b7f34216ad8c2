"""
cursor-settings version constants.

The report schema version is bumped whenever the structured (``--format json``)
report changes shape in a way that breaks consumers.
"""

# Library version (matches pyproject.toml)
CURSOR_SETTINGS_VERSION = "0.1.0"

# Schema version for structured diff reports
REPORT_SCHEMA_VERSION = "report_v1"
