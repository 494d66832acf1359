"""Process-wide application state owned by the controller."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from scv.core.navigation import NavigationStack
from scv.ui.themes import Theme, get_theme

if TYPE_CHECKING:
    from scv.config import AppConfig
    from scv.models import BatchCloneReport, Classroom
    from scv.services import ActivitySource, ClassStore, RepositoryOperations
    from scv.ui.animations import CelebrationAnimation

logger = logging.getLogger(__name__)


class BannerKind(StrEnum):
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class Banner:
    kind: BannerKind
    message: str

    @classmethod
    def error(cls, message: str) -> Banner:
        return cls(BannerKind.ERROR, message)

    @classmethod
    def success(cls, message: str) -> Banner:
        return cls(BannerKind.SUCCESS, message)


@dataclass
class AppState:
    """Everything the controller shares with screens for one session.

    Screens read it during ``render``/``handle_input`` and may touch it in
    ``update``; navigation and banners are changed by the controller only.
    """

    config: AppConfig
    store: ClassStore
    activity: ActivitySource
    repos: RepositoryOperations
    navigation: NavigationStack = field(default_factory=NavigationStack)
    current_class: Classroom | None = None
    loading: str | None = None
    banner: Banner | None = None
    celebration: CelebrationAnimation | None = None
    last_batch: BatchCloneReport | None = None

    @property
    def theme(self) -> Theme:
        return get_theme(self.config.theme)

    @property
    def is_loading(self) -> bool:
        return self.loading is not None

    def show_error(self, message: str) -> None:
        self.loading = None
        self.banner = Banner.error(message)

    def show_success(self, message: str) -> None:
        self.loading = None
        self.banner = Banner.success(message)

    async def close(self) -> None:
        """Release collaborator resources at the end of the session."""
        for resource in (self.activity, self.store):
            closer = getattr(resource, "aclose", None)
            if closer is not None:
                await closer()
                continue
            closer = getattr(resource, "close", None)
            if closer is not None:
                closer()
        logger.info("Application state closed")
