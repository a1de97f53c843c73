# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Booking, Slot


class BookingRepository(Protocol):
    # Must rely on the store's uniqueness constraint and raise
    # SlotTakenError on conflict, not on a prior existence check.
    def add(self, booking: Booking) -> Booking: ...
    def count_for_slot(self, slot: Slot) -> int: ...
