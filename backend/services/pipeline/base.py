"""Abstract base class for all JobFit pipeline stages."""

from abc import ABC, abstractmethod
from typing import Any
import logging

logger = logging.getLogger(__name__)


class BaseStageService(ABC):
    """Base class for pipeline stage services.

    Subclasses must implement:
        - stage_name: identifier used in stage_registry
        - load(): prepare rule tables or other per-process state
        - predict(**kwargs): run the stage and return its typed schema

    Stages hold no per-evaluation state, so one instance serves every call.
    """

    stage_name: str = ""
    _loaded: bool = False

    @abstractmethod
    def load(self) -> None:
        """Prepare stage state. Called once by stage_registry."""

    @abstractmethod
    def predict(self, **kwargs: Any) -> Any:
        """Run the stage. Returns a Pydantic schema defined per stage."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load stage if not already loaded."""
        if not self._loaded:
            logger.info("Loading stage: %s", self.stage_name)
            self.load()
            self._loaded = True
            logger.info("Stage loaded: %s", self.stage_name)
