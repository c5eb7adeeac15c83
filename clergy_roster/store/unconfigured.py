"""Null gateway used when no record store backend is configured."""

from typing import Optional

from clergy_roster.store.errors import StoreNotConfiguredError
from clergy_roster.store.gateway import RecordStoreGateway, SnapshotChannel, SubscriptionFailed
from clergy_roster.store.models import ClergyRecord, OrganizationInfo


class UnconfiguredStore(RecordStoreGateway):
    """Every write fails; the subscription fails immediately so the roster falls back."""

    @property
    def configured(self) -> bool:
        return False

    def subscribe(self) -> SnapshotChannel:
        channel = SnapshotChannel()
        channel.publish(SubscriptionFailed(StoreNotConfiguredError()))
        return channel

    async def create(self, record: ClergyRecord) -> str:
        raise StoreNotConfiguredError()

    async def update(self, record_id: Optional[str], record: ClergyRecord) -> None:
        raise StoreNotConfiguredError()

    async def delete(self, record_id: Optional[str]) -> None:
        raise StoreNotConfiguredError()

    async def get_settings(self) -> Optional[OrganizationInfo]:
        return None

    async def set_settings(self, info: OrganizationInfo) -> None:
        raise StoreNotConfiguredError()
