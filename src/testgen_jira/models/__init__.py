"""
Pydantic models for the testgen-jira value objects.
"""

from .base import ApiModel
from .constants import EMPTY_STRING, JIRA_DEFAULT_ID, UNKNOWN
from .jira import (
    JiraBoard,
    JiraProject,
    JiraSprint,
    JiraStory,
    JiraStoryDetails,
)

__all__ = [
    "ApiModel",
    "EMPTY_STRING",
    "JIRA_DEFAULT_ID",
    "UNKNOWN",
    "JiraBoard",
    "JiraProject",
    "JiraSprint",
    "JiraStory",
    "JiraStoryDetails",
]
