# client/store.py
"""
Optimistic Reconciliation Store.

Owns the five in-memory collections. Every mutator applies its change to
memory before returning, then persists it in a background task; if the remote
write fails the task logs the error and reverts that one change.

Composite actions (assign, return, maintenance, approve) are several
independent writes. Each rolls back on its own, so a partial failure can leave
e.g. the assignment saved while the asset update was reverted. Concurrent
mutations of the same ID are last-writer-wins, locally and remotely.
"""
import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from datetime import date, datetime, timezone
from typing import Protocol

from client.models import (
    Asset,
    AssetRequest,
    AssetStatus,
    Assignment,
    AuthProfile,
    Collection,
    Employee,
    Entity,
    MaintenanceLog,
    MaintenanceStatus,
    RequestStatus,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class RemoteStore(Protocol):
    async def list(self, collection: Collection) -> list[Entity]: ...
    async def upsert(self, collection: Collection, entity: Entity) -> None: ...
    async def delete(self, collection: Collection, entity_id: str) -> None: ...


class IdentitySource(Protocol):
    def get_current_identity(self) -> AuthProfile | None: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10].upper()}"


def status_after_maintenance(asset: Asset) -> AssetStatus:
    """Where an asset goes when its repair completes."""
    return AssetStatus.ASSIGNED if asset.assigned_to else AssetStatus.AVAILABLE


class ReconciliationStore:
    """
    In-memory collections with apply-then-confirm mutators.

    Args:
        remote: Remote store client used to persist changes
        identity: Session holder; enriches requests filed from this client
        clock: Source of "now" for borrow/return dates
    """

    def __init__(
        self,
        remote: RemoteStore,
        identity: IdentitySource | None = None,
        clock: Clock = utc_now,
    ):
        self._remote = remote
        self._identity = identity
        self._clock = clock
        self._collections: dict[Collection, list[Entity]] = {c: [] for c in Collection}
        self._pending: set[asyncio.Task] = set()

    # ---------- Snapshots ----------

    @property
    def assets(self) -> list[Asset]:
        return list(self._collections[Collection.ASSETS])

    @property
    def employees(self) -> list[Employee]:
        return list(self._collections[Collection.EMPLOYEES])

    @property
    def assignments(self) -> list[Assignment]:
        return list(self._collections[Collection.ASSIGNMENTS])

    @property
    def maintenance_logs(self) -> list[MaintenanceLog]:
        return list(self._collections[Collection.MAINTENANCE])

    @property
    def requests(self) -> list[AssetRequest]:
        return list(self._collections[Collection.REQUESTS])

    def snapshot(self, collection: Collection) -> list[Entity]:
        return list(self._collections[collection])

    def find(self, collection: Collection, entity_id: str) -> Entity | None:
        for item in self._collections[collection]:
            if item.id == entity_id:
                return item
        return None

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    # ---------- Wholesale replacement (poller / session end) ----------

    def replace(self, collection: Collection, items: list[Entity]) -> None:
        self._collections[collection] = list(items)

    def clear(self) -> None:
        for collection in Collection:
            self._collections[collection] = []

    async def flush(self) -> None:
        """Wait until every in-flight write has settled (and rolled back if needed)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ---------- Local list edits ----------

    def _prepend(self, collection: Collection, entity: Entity) -> None:
        self._collections[collection] = [entity, *self._collections[collection]]

    def _append(self, collection: Collection, entity: Entity) -> None:
        self._collections[collection] = [*self._collections[collection], entity]

    def _remove(self, collection: Collection, entity_id: str) -> None:
        self._collections[collection] = [
            item for item in self._collections[collection] if item.id != entity_id
        ]

    def _replace(self, collection: Collection, entity: Entity) -> None:
        """Swap in ``entity`` at its ID; a no-op if the ID is gone."""
        self._collections[collection] = [
            entity if item.id == entity.id else item
            for item in self._collections[collection]
        ]

    # ---------- Persistence with rollback ----------

    def _persist(
        self,
        description: str,
        write: Callable[[], Awaitable[None]],
        rollback: Callable[[], None],
    ) -> asyncio.Task:
        """
        Run ``write`` in the background; on any failure log it and run ``rollback``.

        Must be called after the local change is applied: the write only
        starts once the caller yields to the event loop.
        """
        async def run() -> None:
            try:
                await write()
            except Exception:
                logger.exception("Failed to %s, reverting local change", description)
                rollback()

        task = asyncio.create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _create(self, collection: Collection, entity: Entity, *, prepend: bool = True) -> None:
        if prepend:
            self._prepend(collection, entity)
        else:
            self._append(collection, entity)
        self._persist(
            f"save {collection.value} {entity.id}",
            lambda: self._remote.upsert(collection, entity),
            lambda: self._remove(collection, entity.id),
        )

    def _update(self, collection: Collection, updated: Entity, original: Entity | None) -> None:
        self._replace(collection, updated)

        def rollback() -> None:
            if original is not None:
                self._replace(collection, original)

        self._persist(
            f"update {collection.value} {updated.id}",
            lambda: self._remote.upsert(collection, updated),
            rollback,
        )

    def _delete(self, collection: Collection, entity_id: str) -> None:
        original = self.find(collection, entity_id)
        self._remove(collection, entity_id)

        def rollback() -> None:
            if original is not None:
                self._append(collection, original)

        self._persist(
            f"delete {collection.value} {entity_id}",
            lambda: self._remote.delete(collection, entity_id),
            rollback,
        )

    # ---------- Assets ----------

    def add_asset(self, asset: Asset) -> None:
        self._create(Collection.ASSETS, asset)

    def update_asset(self, asset: Asset) -> None:
        self._update(Collection.ASSETS, asset, self.find(Collection.ASSETS, asset.id))

    def delete_asset(self, asset_id: str) -> None:
        self._delete(Collection.ASSETS, asset_id)

    # ---------- Employees ----------

    def add_employee(self, employee: Employee) -> None:
        self._create(Collection.EMPLOYEES, employee, prepend=False)

    def update_employee(self, employee: Employee) -> None:
        self._update(Collection.EMPLOYEES, employee, self.find(Collection.EMPLOYEES, employee.id))

    def delete_employee(self, employee_id: str) -> None:
        self._delete(Collection.EMPLOYEES, employee_id)

    # ---------- Assignments ----------

    def _set_asset(self, asset_id: str, **changes) -> None:
        """Apply ``changes`` to an asset and persist it; restore the original on failure."""
        original = self.find(Collection.ASSETS, asset_id)
        if original is None:
            logger.warning("Asset %s not loaded, skipping status update", asset_id)
            return
        self._update(Collection.ASSETS, original.model_copy(update=changes), original)

    def assign_asset(
        self,
        asset_id: str,
        employee_id: str,
        expected_return: date | None = None,
    ) -> Assignment:
        """Check an asset out to an employee: new active assignment plus asset → Assigned."""
        assignment = Assignment(
            id=new_id("ASG"),
            asset_id=asset_id,
            employee_id=employee_id,
            borrow_date=self._clock().date(),
            expected_return_date=expected_return,
            is_active=True,
        )
        self._create(Collection.ASSIGNMENTS, assignment)
        self._set_asset(asset_id, status=AssetStatus.ASSIGNED, assigned_to=employee_id)
        return assignment

    def return_asset(self, asset_id: str, notes: str | None = None) -> None:
        """Close the asset's active assignment and make the asset Available."""
        today = self._clock().date()
        active = next(
            (
                a for a in self._collections[Collection.ASSIGNMENTS]
                if a.asset_id == asset_id and a.is_active
            ),
            None,
        )
        if active is not None:
            closed = active.model_copy(
                update={"is_active": False, "returned_date": today, "notes": notes}
            )
            self._update(Collection.ASSIGNMENTS, closed, active)
        else:
            logger.warning("No active assignment for asset %s", asset_id)

        self._set_asset(asset_id, status=AssetStatus.AVAILABLE, assigned_to=None)

    # ---------- Maintenance ----------

    def add_maintenance_log(self, log: MaintenanceLog) -> None:
        """Record a repair job; the asset goes In Repair."""
        self._create(Collection.MAINTENANCE, log)
        self._set_asset(log.asset_id, status=AssetStatus.IN_REPAIR)

    def update_maintenance_log(self, log_id: str, status: MaintenanceStatus) -> None:
        """
        Change a log's status. Completing it puts the asset back to Assigned
        or Available depending on whether it is still assigned to someone.
        """
        log = self.find(Collection.MAINTENANCE, log_id)
        if log is None:
            logger.warning("Maintenance log %s not loaded", log_id)
            return

        self._update(Collection.MAINTENANCE, log.model_copy(update={"status": status}), log)

        if status == MaintenanceStatus.COMPLETED:
            asset = self.find(Collection.ASSETS, log.asset_id)
            if asset is not None:
                self._set_asset(asset.id, status=status_after_maintenance(asset))

    # ---------- Requests ----------

    def create_request(self, request: AssetRequest) -> AssetRequest:
        """File a ticket on behalf of the current identity."""
        identity = self._identity.get_current_identity() if self._identity else None
        enriched = request.model_copy(update={
            "user_id": identity.id if identity else None,
            "employee_id": (identity.employee_id if identity else None) or "EMP-UNKNOWN",
            "user_name": identity.name if identity else "You",
            "user_email": identity.email if identity else "",
        })
        self._create(Collection.REQUESTS, enriched)
        return enriched

    def update_request(self, request: AssetRequest) -> None:
        self._update(Collection.REQUESTS, request, self.find(Collection.REQUESTS, request.id))

    def _set_request_status(self, request_id: str, status: RequestStatus) -> AssetRequest | None:
        request = self.find(Collection.REQUESTS, request_id)
        if request is None:
            logger.warning("Request %s not loaded", request_id)
            return None
        self._update(Collection.REQUESTS, request.model_copy(update={"status": status}), request)
        return request

    def approve_request(self, request_id: str, asset_id: str) -> None:
        """Approve a ticket and hand the chosen asset to its employee."""
        request = self._set_request_status(request_id, RequestStatus.APPROVED)
        if request is not None:
            self.assign_asset(asset_id, request.employee_id or "EMP-UNKNOWN")

    def reject_request(self, request_id: str) -> None:
        self._set_request_status(request_id, RequestStatus.REJECTED)

    def close_request(self, request_id: str) -> None:
        self._set_request_status(request_id, RequestStatus.CLOSED)
