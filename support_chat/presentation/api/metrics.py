"""
Prometheus Metrics Endpoint.

Exposes everything recorded in observability/metrics.py in Prometheus text
format.

    curl http://localhost:3000/metrics
"""

from fastapi import APIRouter, Response
from support_chat.observability.metrics import get_metrics_content


router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """Prometheus metrics endpoint."""
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
