import logging
from typing import Dict, List, Sequence

from PartBin.models.import_models import NormalizedComponent

logger = logging.getLogger(__name__)


def merge_duplicates(records: Sequence[NormalizedComponent]) -> List[NormalizedComponent]:
    """
    Collapse records sharing an identity key into one.

    Groups appear in the order their key was first seen. Each output record is
    the group's first member with quantity replaced by the group total, so the
    sum of quantities is unchanged and merging a merged list is a no-op.
    """
    groups: Dict[str, List[NormalizedComponent]] = {}
    for record in records:
        groups.setdefault(record.identity_key(), []).append(record)

    merged = []
    for members in groups.values():
        first = members[0]
        if len(members) == 1:
            merged.append(first)
            continue
        total = sum(member.quantity for member in members)
        logger.debug(f"Merged {len(members)} rows of {first.name!r} into quantity {total}")
        merged.append(first.model_copy(update={"quantity": total}))

    return merged
