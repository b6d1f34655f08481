"""Constants specific to Jira operations."""

# Fields requested when listing the stories of a sprint.
STORY_LIST_FIELDS: list[str] = ["summary", "key"]

# Stories returned per sprint; only the first page is read.
MAX_STORIES = 100

STORY_ISSUE_TYPE = "Story"
