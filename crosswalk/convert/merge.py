"""Priority-based merge for source fields that alias one canonical slot.

A field may overwrite a slot only when nobody has claimed it yet, or when its
priority is strictly greater than the claim. A claim is recorded only when the
router actually wrote a value, so an empty high-priority field never blocks a
later, non-empty, lower-priority one. Equal priority keeps the earlier value.
"""

from typing import Any, Dict, Optional

from crosswalk.convert.annotations import FieldHandle, HubField
from crosswalk.convert.router import TargetRouter
from crosswalk.hub.models import CanonicalRecord
from crosswalk.utils.logger import LoggerManager


logger = LoggerManager.get_logger(__name__)


def claim_key(annotation: HubField) -> str:
    """Slot identity: the target, plus the sub-selector when one is set."""
    selector = annotation.sub_selector()
    return f"{annotation.target}/{selector}" if selector else annotation.target


class PriorityMerger:
    """Tracks which priority currently occupies each slot during one conversion."""

    def __init__(self, router: Optional[TargetRouter] = None):
        self.router = router or TargetRouter()
        self.claims: Dict[str, int] = {}

    def offer(
        self,
        record: CanonicalRecord,
        value: Any,
        handle: FieldHandle,
        priority: Optional[int] = None,
    ) -> bool:
        """Route `value` if its priority beats the current claim.

        Args:
            record: Record being built
            value: Parsed field value
            handle: Source field handle
            priority: Overrides the annotation's priority (default 0)

        Returns:
            True when the value was written and claimed the slot
        """
        annotation = handle.annotation or HubField()
        if priority is None:
            priority = annotation.priority or 0
        key = claim_key(annotation)

        current = self.claims.get(key)
        if current is not None and priority <= current:
            logger.debug(
                f"Skipping '{handle.name}': slot '{key}' held at priority {current}",
                extra={"extra_data": {"field": handle.name, "slot": key, "priority": priority}},
            )
            return False

        written = self.router.route(record, value, handle)
        if written:
            self.claims[key] = priority
        return written
