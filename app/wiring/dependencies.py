from functools import lru_cache
import logging

from fastapi import Depends

from app.core.config import settings
from app.application.ports.session_store import SessionStorePort
from app.application.use_cases.create_session import CreateSessionUseCase
from app.application.use_cases.finalize_confirmation import FinalizeConfirmationUseCase
from app.application.use_cases.manage_sessions import (
    DeleteSessionUseCase,
    GetSessionUseCase,
    ListSessionsUseCase,
)
from app.application.use_cases.submit_availability import JoinSessionUseCase, SubmitAvailabilityUseCase
from app.domain.entities.inventory import EquipmentInventory
from app.infrastructure.store.json_store import JsonSessionStore
from app.infrastructure.store.memory_store import MemorySessionStore


_session_store: MemorySessionStore | JsonSessionStore | None = None


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        if settings.ENV.lower() in {"dev", "local"}:
            _session_store = JsonSessionStore(data_dir=settings.DATA_DIR)
        else:
            _session_store = MemorySessionStore()
        logging.getLogger(__name__).info("Session store ready: %s", type(_session_store).__name__)
    return _session_store


@lru_cache
def get_inventory() -> EquipmentInventory:
    return EquipmentInventory.from_mapping(settings.EQUIPMENT_STOCK)


def get_create_session_use_case(store: SessionStorePort = Depends(get_session_store)) -> CreateSessionUseCase:
    return CreateSessionUseCase(store=store)


def get_list_sessions_use_case(store: SessionStorePort = Depends(get_session_store)) -> ListSessionsUseCase:
    return ListSessionsUseCase(store=store)


def get_get_session_use_case(store: SessionStorePort = Depends(get_session_store)) -> GetSessionUseCase:
    return GetSessionUseCase(store=store)


def get_delete_session_use_case(store: SessionStorePort = Depends(get_session_store)) -> DeleteSessionUseCase:
    return DeleteSessionUseCase(store=store)


def get_join_session_use_case(store: SessionStorePort = Depends(get_session_store)) -> JoinSessionUseCase:
    return JoinSessionUseCase(store=store)


def get_submit_availability_use_case(
    store: SessionStorePort = Depends(get_session_store),
) -> SubmitAvailabilityUseCase:
    return SubmitAvailabilityUseCase(store=store)


def get_finalize_use_case(
    store: SessionStorePort = Depends(get_session_store),
    inventory: EquipmentInventory = Depends(get_inventory),
) -> FinalizeConfirmationUseCase:
    return FinalizeConfirmationUseCase(store=store, inventory=inventory)
