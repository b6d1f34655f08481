"""
Jira data models for testgen-jira.

Pydantic models for the Jira API data structures, organized by entity type.
"""

from .agile import JiraBoard, JiraSprint
from .issue import JiraStory, JiraStoryDetails
from .project import JiraProject

__all__ = [
    "JiraBoard",
    "JiraProject",
    "JiraSprint",
    "JiraStory",
    "JiraStoryDetails",
]
