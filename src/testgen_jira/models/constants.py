"""
Constants and default values for model conversions.

Single source of truth for the fallbacks used when converting tracker
responses to models.
"""

#
# Common defaults
#
EMPTY_STRING = ""
UNKNOWN = "Unknown"

#
# Jira defaults
#
JIRA_DEFAULT_ID = "0"
