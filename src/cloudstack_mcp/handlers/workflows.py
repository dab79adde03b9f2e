"""Building blocks for multi-step handlers.

A workflow runs its steps in order and accumulates the job ids they produce.
Steps whose failure must abort the workflow are plain awaits, so the error
propagates. Steps whose failure is acceptable go through ``attempt``, which
logs the failure, records it as a warning and returns None.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from cloudstack_mcp.core.logging import get_logger
from cloudstack_mcp.errors import CloudStackError, invalid_request
from cloudstack_mcp.handlers.formatting import job_id

logger = get_logger(__name__)


@dataclass
class WorkflowResult:
    """Job ids and tolerated failures collected while a workflow runs."""

    job_ids: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def record(self, response: Any, command: str) -> None:
        jid = job_id(response, command)
        if jid:
            self.job_ids.append(jid)

    async def attempt(
        self,
        step: str,
        call: Callable[[], Awaitable[dict[str, Any]]],
        command: str,
    ) -> dict[str, Any] | None:
        """Run a step whose failure does not abort the workflow.

        Returns:
            The response on success, None when the step failed
        """
        try:
            response = await call()
        except CloudStackError as e:
            logger.warning(f"{step} failed, continuing: {e}")
            self.warnings.append(f"{step} failed: {e}")
            return None
        self.record(response, command)
        return response


def require_confirmation(args: dict[str, Any], message: str) -> None:
    """Refuse to continue unless the caller passed ``confirm=true``."""
    if args.get("confirm") is not True:
        raise invalid_request(message)
