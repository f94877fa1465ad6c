"""Resource use cases."""

from .common import ResourceItem
from .delete_resource import (
    DeleteResourceRequest,
    DeleteResourceResponse,
    DeleteResourceUseCase,
)
from .get_resource import GetResourceRequest, GetResourceResponse, GetResourceUseCase
from .list_resources import (
    ListResourcesRequest,
    ListResourcesResponse,
    ListResourcesUseCase,
)
from .report_resource import (
    ReportResourceRequest,
    ReportResourceResponse,
    ReportResourceUseCase,
)
from .submit_resource import (
    SubmitResourceRequest,
    SubmitResourceResponse,
    SubmitResourceUseCase,
)
from .track_click import TrackClickRequest, TrackClickUseCase
from .update_resource import (
    UpdateResourceRequest,
    UpdateResourceResponse,
    UpdateResourceUseCase,
)

__all__ = [
    "DeleteResourceRequest",
    "DeleteResourceResponse",
    "DeleteResourceUseCase",
    "GetResourceRequest",
    "GetResourceResponse",
    "GetResourceUseCase",
    "ListResourcesRequest",
    "ListResourcesResponse",
    "ListResourcesUseCase",
    "ReportResourceRequest",
    "ReportResourceResponse",
    "ReportResourceUseCase",
    "ResourceItem",
    "SubmitResourceRequest",
    "SubmitResourceResponse",
    "SubmitResourceUseCase",
    "TrackClickRequest",
    "TrackClickUseCase",
    "UpdateResourceRequest",
    "UpdateResourceResponse",
    "UpdateResourceUseCase",
]
