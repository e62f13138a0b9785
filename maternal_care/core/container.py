"""
Dependency Injection Container

Wires the maternal health use cases to their concrete persistence, channel
and text generation implementations.
"""

import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from maternal_care.config.settings import Settings, get_settings
from maternal_care.database.async_db import get_session_factory
from maternal_care.domains.maternal_health.application.services import (
    ContentService,
    DeliveryDispatcher,
    FallbackNotifier,
    ReminderQueue,
)
from maternal_care.domains.maternal_health.application.use_cases import (
    CalculatePregnancyUseCase,
    DismissReminderUseCase,
    GetReminderHistoryUseCase,
    GetReminderStatsUseCase,
    GetUpcomingRemindersUseCase,
    RunReminderSweepUseCase,
    SendDailyTipsUseCase,
    SendTestReminderUseCase,
)
from maternal_care.domains.maternal_health.infrastructure.notifiers import build_channel_chain
from maternal_care.domains.maternal_health.infrastructure.persistence.sqlalchemy import (
    SqlAlchemyNotificationLog,
    SqlAlchemyReminderHistoryStore,
    SqlAlchemySubjectRepository,
)
from maternal_care.domains.maternal_health.infrastructure.scheduler import ReminderJobs
from maternal_care.integrations.llm import OllamaTextGenerator

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Container for the maternal health service.

    Repositories and the channel chain are stateless and shared; use cases
    are created on demand.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        channels: FallbackNotifier | None = None,
        content_service: ContentService | None = None,
    ):
        """
        Initialize container.

        Args:
            settings: Application settings (defaults to get_settings())
            session_factory: Session factory (defaults to the application engine)
            channels: Notifier chain override, built from settings when omitted
            content_service: Content service override, built from settings when omitted
        """
        self.settings = settings or get_settings()
        self._session_factory = session_factory
        self._channels = channels
        self._content_service = content_service

        self._reminder_store: SqlAlchemyReminderHistoryStore | None = None
        self._subject_repository: SqlAlchemySubjectRepository | None = None
        self._notification_log: SqlAlchemyNotificationLog | None = None

        logger.info("DependencyContainer initialized")

    # ==================== SHARED RESOURCES ====================

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    def get_channels(self) -> FallbackNotifier:
        if self._channels is None:
            self._channels = build_channel_chain(self.settings)
        return self._channels

    def get_content_service(self) -> ContentService:
        if self._content_service is None:
            generator = OllamaTextGenerator(
                model_name=self.settings.OLLAMA_API_MODEL,
                base_url=self.settings.OLLAMA_API_URL,
                temperature=self.settings.OLLAMA_TEMPERATURE,
                max_tokens=self.settings.OLLAMA_MAX_TOKENS,
            )
            self._content_service = ContentService(generator, timeout_seconds=self.settings.CONTENT_TIMEOUT_SECONDS)
        return self._content_service

    # ==================== REPOSITORIES ====================

    def get_reminder_store(self) -> SqlAlchemyReminderHistoryStore:
        if self._reminder_store is None:
            self._reminder_store = SqlAlchemyReminderHistoryStore(self.session_factory)
        return self._reminder_store

    def get_subject_repository(self) -> SqlAlchemySubjectRepository:
        if self._subject_repository is None:
            self._subject_repository = SqlAlchemySubjectRepository(self.session_factory)
        return self._subject_repository

    def get_notification_log(self) -> SqlAlchemyNotificationLog:
        if self._notification_log is None:
            self._notification_log = SqlAlchemyNotificationLog(self.session_factory)
        return self._notification_log

    # ==================== PIPELINE ====================

    def create_reminder_queue(self) -> ReminderQueue:
        return ReminderQueue(self.get_reminder_store())

    def create_delivery_dispatcher(self) -> DeliveryDispatcher:
        return DeliveryDispatcher(
            store=self.get_reminder_store(),
            subject_repository=self.get_subject_repository(),
            channels=self.get_channels(),
            notification_log=self.get_notification_log(),
            max_attempts=self.settings.MAX_DELIVERY_ATTEMPTS,
            retry_backoff=timedelta(minutes=self.settings.RETRY_BACKOFF_MINUTES),
        )

    def create_reminder_jobs(self) -> ReminderJobs:
        return ReminderJobs(
            sweep=self.create_run_reminder_sweep_use_case(),
            dispatcher=self.create_delivery_dispatcher(),
            daily_tips=self.create_send_daily_tips_use_case() if self.settings.DAILY_TIPS_ENABLED else None,
            batch_size=self.settings.DISPATCH_BATCH_SIZE,
        )

    # ==================== USE CASES ====================

    def create_run_reminder_sweep_use_case(self) -> RunReminderSweepUseCase:
        return RunReminderSweepUseCase(
            subject_repository=self.get_subject_repository(),
            reminder_queue=self.create_reminder_queue(),
            timezone_name=self.settings.REMINDER_TIMEZONE,
        )

    def create_send_daily_tips_use_case(self) -> SendDailyTipsUseCase:
        return SendDailyTipsUseCase(
            subject_repository=self.get_subject_repository(),
            content_service=self.get_content_service(),
            channels=self.get_channels(),
            notification_log=self.get_notification_log(),
            timezone_name=self.settings.REMINDER_TIMEZONE,
        )

    def create_send_test_reminder_use_case(self) -> SendTestReminderUseCase:
        return SendTestReminderUseCase(
            subject_repository=self.get_subject_repository(),
            channels=self.get_channels(),
            notification_log=self.get_notification_log(),
        )

    def create_dismiss_reminder_use_case(self) -> DismissReminderUseCase:
        return DismissReminderUseCase(self.get_reminder_store())

    def create_get_upcoming_reminders_use_case(self) -> GetUpcomingRemindersUseCase:
        return GetUpcomingRemindersUseCase(self.get_reminder_store(), self.get_subject_repository())

    def create_get_reminder_history_use_case(self) -> GetReminderHistoryUseCase:
        return GetReminderHistoryUseCase(self.get_reminder_store(), self.get_subject_repository())

    def create_get_reminder_stats_use_case(self) -> GetReminderStatsUseCase:
        return GetReminderStatsUseCase(self.get_reminder_store(), self.get_subject_repository())

    def create_calculate_pregnancy_use_case(self) -> CalculatePregnancyUseCase:
        return CalculatePregnancyUseCase()


# Global container instance
_container: DependencyContainer | None = None


def get_container() -> DependencyContainer:
    """Get or create the global container."""
    global _container

    if _container is None:
        _container = DependencyContainer()

    return _container


def set_container(container: DependencyContainer) -> None:
    """Replace the global container (tests and custom wiring)."""
    global _container
    _container = container


def reset_container() -> None:
    """Drop the global container."""
    global _container
    _container = None
