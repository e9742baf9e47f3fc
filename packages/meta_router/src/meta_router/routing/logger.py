"""Routing decision logging."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from meta_router.models.config import ConfigOverrides, RoutingLoggerConfig
    from meta_router.models.routing import MatcherEvaluation

logger = logging.getLogger(__name__)


class RoutingObserver(Protocol):
    """Receives one callback per routing decision."""

    def is_enabled(self) -> bool: ...

    def is_debug_mode(self) -> bool: ...

    def log_routing_decision(
        self,
        target_agent: str,
        matcher_type: str,
        matched_content: str,
        config_overrides: ConfigOverrides | None = None,
        evaluations: list[MatcherEvaluation] | None = None,
    ) -> None: ...


class RoutingLogger:
    """Write routing decisions as JSON lines to the console logger or a file."""

    def __init__(self, config: RoutingLoggerConfig) -> None:
        self._config = config
        self._enabled = config.enabled and config.output != "disabled"

    def is_enabled(self) -> bool:
        return self._enabled

    def is_debug_mode(self) -> bool:
        return self._config.debug_mode

    def build_entry(
        self,
        target_agent: str,
        matcher_type: str,
        matched_content: str,
        config_overrides: ConfigOverrides | None = None,
        evaluations: list[MatcherEvaluation] | None = None,
    ) -> dict[str, Any]:
        """Build the structured log entry for one decision."""
        entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "target_agent": target_agent,
            "matcher_type": matcher_type,
            "matched_content": matched_content,
        }
        if config_overrides is not None:
            entry["config_overrides"] = config_overrides.model_dump(exclude_none=True)
        if self._config.debug_mode and evaluations is not None:
            entry["debug_info"] = {
                "all_evaluated": [evaluation.to_dict() for evaluation in evaluations],
                "total_evaluated": len(evaluations),
            }
        return entry

    def log_routing_decision(
        self,
        target_agent: str,
        matcher_type: str,
        matched_content: str,
        config_overrides: ConfigOverrides | None = None,
        evaluations: list[MatcherEvaluation] | None = None,
    ) -> None:
        """Log a routing decision. Output failures never reach the caller."""
        if not self._enabled:
            return

        entry = self.build_entry(
            target_agent, matcher_type, matched_content, config_overrides, evaluations
        )
        line = json.dumps(entry)

        if self._config.output == "console":
            logger.info("%s", line)
        elif self._config.output == "file":
            self._write_to_file(line)

    def _write_to_file(self, line: str) -> None:
        path = Path(self._config.log_file).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            logger.warning("Failed to write routing log to %s: %s", path, exc)
