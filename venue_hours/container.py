"""Dependency injection container for application components."""
import logging
from datetime import timedelta
from functools import partial
from typing import Optional

import redis

from venue_hours.config import Settings
from venue_hours.dao import RedisScheduleDAO
from venue_hours.db import RedisClient
from venue_hours.handlers import VenueHandler
from venue_hours.seed import seed_records
from venue_hours.services import AuthGate, IdentityStore, ScheduleService, StatusProjector
from venue_hours.services.time_window import local_now

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container.

    Initializes and wires up all application dependencies.
    """

    def __init__(self, settings: Settings, redis_client: Optional[RedisClient] = None):
        """Initialize container with all dependencies.

        Args:
            settings: Application settings
            redis_client: Pre-built client (tests); connects from settings when None
        """
        logger.info("[Container] Initializing container")
        self.settings = settings

        if redis_client is None:
            logger.info(
                f"[Container] Connecting to Redis at {settings.redis_address}"
            )
            redis_client = RedisClient.from_settings(
                host=settings.redis_host,
                port=settings.redis_port,
                password=settings.redis_password,
                db=settings.redis_db,
            )
        self.redis_client = redis_client

        self.schedule_dao = RedisScheduleDAO(self.redis_client)

        if settings.seed_on_startup:
            self.schedule_dao.seed_if_empty(seed_records())

        if settings.admin_password_hash:
            self.identity_store = IdentityStore(
                settings.admin_username, settings.admin_password_hash
            )
        else:
            logger.warning(
                "[Container] ADMIN_PASSWORD_HASH not configured, hashing ADMIN_PASSWORD at startup"
            )
            self.identity_store = IdentityStore.from_plain_password(
                settings.admin_username, settings.admin_password
            )

        self.auth_gate = AuthGate(
            self.identity_store,
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            token_ttl=timedelta(minutes=settings.token_ttl_minutes),
        )

        clock = partial(local_now, settings.local_timezone)
        self.schedule_service = ScheduleService(self.schedule_dao, clock=clock)
        self.status_projector = StatusProjector(self.schedule_service)

        self.venue_handler = VenueHandler(
            self.schedule_service, self.status_projector, self.auth_gate
        )

        logger.info("[Container] Container initialized successfully")

    def shutdown(self):
        """Clean up resources on shutdown."""
        logger.info("[Container] Shutting down container")
        try:
            self.redis_client.client.close()
            logger.info("[Container] Redis connection closed")
        except redis.RedisError as e:
            logger.error(f"[Container] Error closing Redis connection: {e}")
