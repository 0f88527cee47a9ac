"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``patchbay.toml`` only carries
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from patchbay.domain.types import CompositionStrategy, PassValue

# --- patchbay.toml sections ---


class HttpSourceConfig(BaseModel):
    """[sources.http] section."""

    model_config = {"frozen": True}

    base_url: str | None = None
    timeout: float = 10.0


class FtpSourceConfig(BaseModel):
    """[sources.ftp] section."""

    model_config = {"frozen": True}

    host: str | None = None
    port: int = 21
    user: str = "anonymous"
    password: str = ""
    timeout: float = 10.0


class SourcesConfig(BaseModel):
    """[sources] section.

    ``file_root`` is relative to the workspace root unless absolute.
    HTTP and FTP sources are only registered when configured.
    """

    model_config = {"frozen": True}

    file_root: Path = Path(".")
    http: HttpSourceConfig = Field(default_factory=HttpSourceConfig)
    ftp: FtpSourceConfig = Field(default_factory=FtpSourceConfig)


class NetworkConfig(BaseModel):
    """[networks.<name>] section."""

    model_config = {"frozen": True}

    api_base: str | None = None
    token: str | None = None
    timeout: float = 10.0


class NetworksConfig(BaseModel):
    """[networks] section. Only networks with an ``api_base`` are registered."""

    model_config = {"frozen": True}

    vk: NetworkConfig = Field(default_factory=NetworkConfig)
    facebook: NetworkConfig = Field(default_factory=NetworkConfig)
    twitter: NetworkConfig = Field(default_factory=NetworkConfig)


class PipelineConfig(BaseModel):
    """[pipeline] section."""

    model_config = {"frozen": True}

    strategy: CompositionStrategy = CompositionStrategy.OBSERVER
    pass_value: PassValue = PassValue.OUTPUT
    handlers: list[str] = Field(default_factory=lambda: ["audit"])


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: Path = Path(".patchbay/patchbay.db")


class MailConfig(BaseModel):
    """[mail] section. The mail handler needs ``host`` and ``recipients``."""

    model_config = {"frozen": True}

    host: str | None = None
    port: int = 25
    sender: str = "patchbay@localhost"
    recipients: list[str] = Field(default_factory=list)
    subject: str = "patchbay notification"
    timeout: float = 10.0


class PatchbayConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    networks: NetworksConfig = Field(default_factory=NetworksConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
