"""
Application state - the owned object graph behind the API.

One FocusFlowState exists per running app. It is built during startup and
handed to route handlers through the get_state dependency, so tests can swap
in their own instance with app.dependency_overrides.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Request

from .core.enrichment import EnrichmentCoordinator
from .core.history_store import HistoryStore
from .core.session_controller import SessionController
from .llm.base import LLMProvider
from .llm.factory import create_llm_provider
from .services.study_aid import StudyAidGenerator
from .storage import LocalStorage, StorageInterface

logger = logging.getLogger(__name__)


@dataclass
class FocusFlowState:
    storage: StorageInterface
    store: HistoryStore
    controller: SessionController
    coordinator: EnrichmentCoordinator


def get_llm_provider(config: Any) -> Optional[LLMProvider]:
    """Get configured LLM provider or None."""
    api_key = config.llm_api_key or config.gemini_api_key
    if not api_key:
        return None
    return create_llm_provider(
        provider=config.llm_provider,
        api_key=api_key,
        model=config.llm_model,
        base_url=config.llm_base_url,
        timeout=config.llm_timeout,
    )


def build_state(
    config: Any,
    storage: Optional[StorageInterface] = None,
    llm_provider: Optional[LLMProvider] = None,
) -> FocusFlowState:
    """
    Wire storage, store, controller and coordinator together.
    The history is not loaded here; call state.store.load() once the event loop runs.

    Args:
        config: Settings object
        storage: Storage backend, LocalStorage at config.local_storage_path by default
        llm_provider: Provider for study aids, created from config by default
    """
    if storage is None:
        storage = LocalStorage(config.local_storage_path)
    if llm_provider is None:
        llm_provider = get_llm_provider(config)
    if llm_provider is None:
        logger.warning("No LLM API key configured, AI Studio requests will fail")

    store = HistoryStore(storage, key=config.history_key)
    controller = SessionController(store, default_title=config.default_session_title)
    generator = StudyAidGenerator(llm_provider, temperature=config.llm_temperature)
    coordinator = EnrichmentCoordinator(controller, generator)
    return FocusFlowState(storage=storage, store=store, controller=controller, coordinator=coordinator)


def get_state(request: Request) -> FocusFlowState:
    """FastAPI dependency returning the app's state."""
    state = getattr(request.app.state, "focusflow", None)
    if state is None:
        raise RuntimeError("FocusFlow state not initialized. Start the app through its lifespan.")
    return state
