from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ...features.status_overrides import OverrideSource
from ...utils.cache import DocumentCache
from ..router import RouteGroup


@dataclass(frozen=True)
class RouteDependencies:
    logger: logging.Logger
    route_groups: Callable[[], Sequence[RouteGroup]]
    status_source: Optional[OverrideSource] = None
    cache: Optional[DocumentCache] = None
