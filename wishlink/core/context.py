"""
wishlink/core/context.py

Purpose: Application context

- Owns the key-value store
- Wires the session, auth directory, wish repository and poller onto it
- Passed explicitly to whoever needs the services (no module singletons)
"""

from dataclasses import dataclass
from typing import Optional

from wishlink.core.config import Settings, settings as default_settings
from wishlink.db.store import KeyValueStore, create_store
from wishlink.services.auth_service import AuthDirectory
from wishlink.services.notification_service import NotificationPoller
from wishlink.services.session_service import SessionService
from wishlink.services.sms_service import SimulatedSmsSender, log_notifier
from wishlink.services.wish_service import WishRepository


@dataclass
class AppContext:
    settings: Settings
    store: KeyValueStore
    sessions: SessionService
    auth: AuthDirectory
    wishes: WishRepository
    poller: NotificationPoller


def build_context(config: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> AppContext:
    """
    Builds every service on top of one store.

    Args:
        config: Settings (the global settings when omitted)
        store: Store to use instead of the configured backend

    Returns:
        AppContext
    """
    config = config or default_settings
    store = store if store is not None else create_store(config)

    sessions = SessionService(store)
    auth = AuthDirectory(
        store,
        sessions,
        hash_scheme=config.PASSWORD_HASH_SCHEME,
        hash_iterations=config.PASSWORD_HASH_ITERATIONS,
    )
    wishes = WishRepository(
        store,
        code_max_attempts=config.WISH_CODE_MAX_ATTEMPTS,
        tz_name=config.TIMEZONE,
    )
    sender = SimulatedSmsSender(notifier=log_notifier if config.DESKTOP_NOTIFICATIONS else None)
    poller = NotificationPoller(
        wishes,
        sender,
        interval_seconds=config.POLL_INTERVAL_SECONDS,
        send_hour=config.SMS_SEND_HOUR,
        tz_name=config.TIMEZONE,
    )

    return AppContext(
        settings=config,
        store=store,
        sessions=sessions,
        auth=auth,
        wishes=wishes,
        poller=poller,
    )
