"""Hub — the single dependency injected into every service.

The Hub owns the backend clients, the dispatch registries, the record
store and the notification pipelines. Everything is built lazily on
first access so ``--help`` and ``--version`` never open a connection.
"""

from __future__ import annotations

import ftplib
import logging
import threading
from typing import TYPE_CHECKING, Any

import httpx

from patchbay.adapters import BlobReader, FileReaderAdapter, FtpReaderAdapter, HttpReaderAdapter
from patchbay.dispatch.registry import StrategyRegistry
from patchbay.domain.errors import AdapterError, ConfigurationError, DispatchError
from patchbay.domain.types import AdapterErrorKind, Network, SourceKind
from patchbay.handlers import HANDLER_FACTORIES, HandlerContext
from patchbay.infrastructure.cache import InMemoryCache
from patchbay.infrastructure.database.engine import init_database, is_memory_database
from patchbay.infrastructure.mail import SmtpMailer
from patchbay.infrastructure.store import RecordStore
from patchbay.pipeline import CoreOperation, NotificationPipeline, build_pipeline
from patchbay.workflow.clients import JsonApiSocialClient
from patchbay.workflow.networks import build_steps
from patchbay.workflow.skeleton import WorkflowSteps

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from patchbay.config.settings import PatchbaySettings

logger = logging.getLogger(__name__)


class Hub:
    """Shared wiring for services.

    Registries and pipelines are regular objects: code holding a Hub may
    register extra readers, networks or handlers at runtime.
    """

    def __init__(self, settings: PatchbaySettings) -> None:
        self.settings = settings
        self.cache = InMemoryCache()
        self._engine: Engine | None = None
        self._readers: StrategyRegistry[SourceKind, BlobReader] | None = None
        self._networks: StrategyRegistry[Network, WorkflowSteps[Any]] | None = None
        self._pipelines: dict[str, NotificationPipeline] = {}
        self._closables: list[Any] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine (database created on first access)."""
        with self._lock:
            if self._engine is None:
                path = self.settings.store.path
                if not is_memory_database(path):
                    path = self.settings.resolve_path(path)
                self._engine = init_database(path)
            return self._engine

    @property
    def store(self) -> RecordStore:
        return RecordStore(self.engine)

    # ------------------------------------------------------------------
    # Registries
    # ------------------------------------------------------------------

    @property
    def readers(self) -> StrategyRegistry[SourceKind, BlobReader]:
        """Source kind → blob reader. ``dispatch`` calls ``read``."""
        with self._lock:
            if self._readers is None:
                self._readers = self._build_readers()
            return self._readers

    @property
    def networks(self) -> StrategyRegistry[Network, WorkflowSteps[Any]]:
        """Network → workflow step set."""
        with self._lock:
            if self._networks is None:
                self._networks = self._build_networks()
            return self._networks

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    def pipeline(self, operation: str, core: CoreOperation) -> NotificationPipeline:
        """Return the pipeline for *operation*, creating it on first use.

        A new pipeline uses the configured strategy and pass-value mode,
        with the configured handlers registered in order. *core* is only
        used on creation.
        """
        with self._lock:
            existing = self._pipelines.get(operation)
            if existing is not None:
                return existing
            config = self.settings.pipeline
            pipeline = build_pipeline(
                config.strategy,
                core,
                operation=operation,
                pass_value=config.pass_value,
            )
            context = self.handler_context()
            for name in config.handlers:
                pipeline.register(self._build_handler(name, context), name=name)
            self._pipelines[operation] = pipeline
            logger.debug(
                "Built %s pipeline for %s with handlers %s",
                config.strategy,
                operation,
                config.handlers,
            )
            return pipeline

    def pipelines(self) -> dict[str, NotificationPipeline]:
        """Pipelines built so far, by operation."""
        with self._lock:
            return dict(self._pipelines)

    def handler_context(self) -> HandlerContext:
        mail = self.settings.mail
        mailer = SmtpMailer(mail) if mail.host else None
        return HandlerContext(
            cache=self.cache,
            mailer=mailer,
            recipients=list(mail.recipients),
            subject=mail.subject,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close backend clients and dispose the engine."""
        with self._lock:
            for closable in reversed(self._closables):
                try:
                    closable.close()
                except Exception:
                    logger.warning("Failed to close %r", closable, exc_info=True)
            self._closables.clear()
            self._readers = None
            self._networks = None
            self._pipelines.clear()
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _build_handler(self, name: str, context: HandlerContext) -> Any:
        try:
            return HANDLER_FACTORIES.dispatch(name, context)
        except DispatchError as exc:
            msg = f"Unknown handler in [pipeline] handlers: {name!r}. Available: {exc.available}"
            raise ConfigurationError(msg) from exc
        except ValueError as exc:
            msg = f"Cannot build handler {name!r}: {exc}"
            raise ConfigurationError(msg) from exc

    def _build_readers(self) -> StrategyRegistry[SourceKind, BlobReader]:
        sources = self.settings.sources
        registry = StrategyRegistry[SourceKind, BlobReader]("readers", method="read")

        file_root = self.settings.resolve_path(sources.file_root)
        registry.register(SourceKind.FILE, FileReaderAdapter(file_root))

        http_client = httpx.Client(
            base_url=sources.http.base_url or "",
            timeout=sources.http.timeout,
            follow_redirects=True,
        )
        http_reader = HttpReaderAdapter(http_client)
        self._closables.append(http_reader)
        registry.register(SourceKind.HTTP, http_reader)

        if sources.ftp.host:
            ftp_reader = FtpReaderAdapter(self._connect_ftp())
            self._closables.append(ftp_reader)
            registry.register(SourceKind.FTP, ftp_reader)

        return registry

    def _connect_ftp(self) -> ftplib.FTP:
        config = self.settings.sources.ftp
        assert config.host is not None
        client = ftplib.FTP(timeout=config.timeout)
        try:
            client.connect(config.host, config.port)
            client.login(config.user, config.password)
        except (ftplib.Error, OSError, EOFError) as exc:
            client.close()
            msg = f"Cannot connect to FTP server {config.host}:{config.port}: {exc}"
            raise AdapterError(AdapterErrorKind.UNREACHABLE, msg) from exc
        return client

    def _build_networks(self) -> StrategyRegistry[Network, WorkflowSteps[Any]]:
        registry = StrategyRegistry[Network, WorkflowSteps[Any]]("networks")
        for network in Network:
            config = getattr(self.settings.networks, network.value)
            if not config.api_base:
                continue
            headers = {"Authorization": f"Bearer {config.token}"} if config.token else None
            http_client = httpx.Client(
                base_url=config.api_base,
                timeout=config.timeout,
                headers=headers,
            )
            social_client = JsonApiSocialClient(http_client)
            self._closables.append(social_client)
            registry.register(network, build_steps(network, social_client))
        return registry
