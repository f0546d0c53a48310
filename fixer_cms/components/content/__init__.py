"""
Content component - pages, posts, portfolio items and research papers.
"""

from .component import (
    PUBLIC_PATH_PREFIXES,
    ContentConfig,
    is_valid_slug,
    prepare_record,
    public_path,
    run,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_set_status,
    run_update,
    slugify,
    validate_record,
)
from .models import (
    ContentListOutput,
    ContentOperationOutput,
    ContentOutput,
    ContentValidationError,
    CreateContentInput,
    DeleteContentInput,
    GetContentInput,
    ListContentInput,
    SetStatusInput,
    UpdateContentInput,
)
from .ports import ContentRepoPort, PublishNotifierPort, RulesPort, TimePort

__all__ = [
    # Entry points
    "run",
    "run_create",
    "run_update",
    "run_get",
    "run_list",
    "run_set_status",
    "run_delete",
    # Input models
    "CreateContentInput",
    "UpdateContentInput",
    "GetContentInput",
    "ListContentInput",
    "SetStatusInput",
    "DeleteContentInput",
    # Output models
    "ContentOutput",
    "ContentListOutput",
    "ContentOperationOutput",
    "ContentValidationError",
    # Ports
    "ContentRepoPort",
    "PublishNotifierPort",
    "RulesPort",
    "TimePort",
    # Helpers
    "PUBLIC_PATH_PREFIXES",
    "ContentConfig",
    "is_valid_slug",
    "prepare_record",
    "public_path",
    "slugify",
    "validate_record",
]
