"""
Utility functions for the testgen-jira integration.
"""

from .adf import first_text_run, is_adf_document
from .auth import basic_auth_header, encode_basic_auth
from .logging import log_config_param, mask_sensitive, setup_logging
from .urls import is_atlassian_cloud_url, normalize_base_url

__all__ = [
    "basic_auth_header",
    "encode_basic_auth",
    "first_text_run",
    "is_adf_document",
    "is_atlassian_cloud_url",
    "log_config_param",
    "mask_sensitive",
    "normalize_base_url",
    "setup_logging",
]
