# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Service, ServiceFilter


class ServiceRepository(Protocol):
    def search(self, criteria: ServiceFilter) -> Sequence[Service]: ...
    def find_by_id(self, service_id: int) -> Service | None: ...
    def add(self, service: Service) -> Service: ...
