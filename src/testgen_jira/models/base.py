"""
Base model for the testgen-jira value objects.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

# Type variable for the return type of from_api_response
T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for all API models with common conversion methods.

    Instances are frozen: they are built once per tracker response and only
    ever serialized afterwards.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Convert an API response to a model instance.

        Args:
            data: The API response data
            **kwargs: Additional context parameters

        Returns:
            An instance of the model

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """
        Convert the model to the JSON shape returned by the facade.

        Returns:
            A dictionary with only the fields exposed to callers
        """
        return self.model_dump(exclude_none=True)
