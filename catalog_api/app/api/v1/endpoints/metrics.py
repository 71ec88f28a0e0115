"""
Metrics endpoints for API v1.

``GET /metrics`` exposes the current value of every operational counter
(users and products created, updated, deleted, not found, e-mail
conflicts and alerts) as a flat JSON object keyed by counter name.
``GET /metrics/{name}`` returns one counter together with its
description.
"""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status

from catalog_api.app.core.metrics import MetricsRegistry
from catalog_api.app.schemas.metrics import CounterRead
from catalog_api.app.api.deps import get_metrics

router = APIRouter()


@router.get("", response_model=Dict[str, int])
def read_metrics(registry: MetricsRegistry = Depends(get_metrics)) -> Dict[str, int]:
    return registry.snapshot()


@router.get("/{name}", response_model=CounterRead)
def read_counter(name: str, registry: MetricsRegistry = Depends(get_metrics)) -> CounterRead:
    if name not in registry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Counter not found")
    return CounterRead(name=name, value=registry.get(name), description=registry.describe(name))
