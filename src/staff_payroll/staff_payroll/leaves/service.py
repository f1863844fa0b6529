from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InvalidTransition, NotFound
from ..core.rules import PayrollRules
from ..stores.repository import StoreRepository
from ..users.access import require_staff, require_store_manager
from ..users.model import User
from .model import LeaveRequest
from .quota import approved_in_month, check_leave_application
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, stores: StoreRepository, *, rules: Optional[PayrollRules] = None):
        self._leaves = leaves
        self._stores = stores
        self._rules = rules or PayrollRules()

    def _rules_for_store(self, store_id: int) -> PayrollRules:
        store = self._stores.get_store(int(store_id))
        return store.effective_rules(self._rules) if store else self._rules

    def apply_leave(
        self,
        actor: User,
        *,
        leave_date: date,
        leave_type: LeaveType = LeaveType.PAID,
        reason: str = "",
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        staff = require_staff(actor)
        now = now or now_local()
        rules = self._rules_for_store(staff.store_id)

        draft = check_leave_application(
            staff_id=staff.user_id,
            store_id=staff.store_id,
            leave_date=leave_date,
            existing_leaves=self._leaves.list_for_staff(staff.user_id),
            monthly_quota=rules.max_leaves_per_month,
            today=now.date(),
            leave_type=LeaveType(leave_type),
            reason=optional_text(reason) or "",
        )
        created = self._leaves.create_leave_request(draft, now=now)
        logger.info("Leave request %s created for staff %s on %s", created.request_id, staff.user_id, leave_date)
        return created

    def approve(self, actor: User, request_id: int, *, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(actor, request_id, LeaveStatus.APPROVED, now=now)

    def reject(self, actor: User, request_id: int, *, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(actor, request_id, LeaveStatus.REJECTED, now=now)

    def _decide(self, actor: User, request_id: int, status: LeaveStatus, *, now: Optional[datetime]) -> LeaveRequest:
        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise NotFound(f"Leave request {request_id} does not exist")
        require_store_manager(actor, req.store_id)
        if req.status != LeaveStatus.PENDING:
            raise InvalidTransition(f"Leave request was already {req.status.value}")

        ok = self._leaves.update_leave_request(
            req.request_id,
            status=status,
            decided_by=actor.user_id,
            now=now or now_local(),
        )
        if not ok:
            raise InvalidTransition("Leave request was decided by someone else")

        logger.info("Leave request %s %s by user %s", req.request_id, status.value, actor.user_id)
        return self._leaves.get_by_id(req.request_id)

    def list_for_staff(self, staff_id: int) -> Sequence[LeaveRequest]:
        items = list(self._leaves.list_for_staff(int(staff_id)))
        items.sort(key=lambda r: r.leave_date, reverse=True)
        return items

    def list_pending_for_store(self, actor: User, store_id: int) -> Sequence[LeaveRequest]:
        require_store_manager(actor, store_id)
        return self._leaves.list_pending_for_store(int(store_id))

    def leaves_remaining(self, staff_id: int, store_id: int, year: int, month: int) -> int:
        quota = self._rules_for_store(store_id).max_leaves_per_month
        used = approved_in_month(staff_id, self._leaves.list_for_staff(int(staff_id)), year, month)
        return max(0, quota - used)
