"""Fill in canteen and line ids that were unknown when a plan was cached.

Plans fetched before the catalog knew a canteen or line (or a particular
spelling of its name) are stored with ``id: null``. Once the catalog has
caught up, those ids can be resolved from the stored names without
re-fetching anything.

Only null ids are ever filled in. Every other field, the order of plans and
the order of lines stay exactly as stored, and a date is only rewritten when
at least one id actually changed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from mensa.domain.Catalog import Catalog
from mensa.domain.DateKey import DateKey
from mensa.domain.Plan import PlanRecord
from mensa.infra.Plan_Cache import PlanCache

logger = logging.getLogger(__name__)

FixupCallback = Callable[[DateKey], bool]


@dataclass
class FixupReport:
    scanned: int = 0
    reconciled: List[DateKey] = field(default_factory=list)
    written: List[DateKey] = field(default_factory=list)
    failed: Dict[DateKey, Exception] = field(default_factory=dict)


def _always(date: DateKey) -> bool:
    return True


def fixup_plan(plan: PlanRecord, catalog: Catalog) -> PlanRecord:
    """Return plan with resolvable ids filled in.

    The same object is returned when nothing could be filled in, otherwise a
    copy; the input is never modified. Line names are only matched once the
    canteen id is known, since they are ambiguous across canteens.
    """
    canteen_id = plan.get('id')
    if canteen_id is None:
        canteen_id = catalog.match_canteen_by_name(plan.get('name'))
    if canteen_id is None:
        return plan

    lines = plan.get('lines') or []
    fixed_lines = []
    lines_changed = False
    for line in lines:
        if line.get('id') is not None:
            fixed_lines.append(line)
            continue
        line_id = catalog.match_line_by_name(canteen_id, line.get('name'))
        if line_id is None:
            fixed_lines.append(line)
            continue
        fixed_lines.append({**line, 'id': line_id})
        lines_changed = True

    if canteen_id == plan.get('id') and not lines_changed:
        return plan

    fixed = {**plan, 'id': canteen_id}
    if lines_changed:
        fixed['lines'] = fixed_lines
    return fixed


def fixup_plans(plans: List[PlanRecord], catalog: Catalog) -> List[PlanRecord]:
    return [fixup_plan(plan, catalog) for plan in plans]


def fixup_cache(cache: PlanCache, catalog: Catalog,
                callback: Optional[FixupCallback] = None) -> FixupReport:
    """Fix all plans stored in the cache.

    ``callback`` is invoked with each date whose plans would change. It may log
    or count; returning False skips the write (dry run) while the date is still
    reported as reconciled. A storage fault or a malformed record for one date
    is logged and recorded in the report, and the remaining dates are still
    processed. Errors raised by the callback itself are not caught.
    """
    callback = callback or _always
    report = FixupReport()

    for date in sorted(cache.list()):
        report.scanned += 1
        try:
            plans = cache.get(date)
        except Exception as e:
            logger.error("fixup: could not read %s: %s", date, e)
            report.failed[date] = e
            continue
        if plans is None:
            continue

        try:
            fixed = fixup_plans(plans, catalog)
        except (AttributeError, TypeError) as e:
            logger.error("fixup: malformed plans for %s: %s", date, e)
            report.failed[date] = e
            continue
        if fixed == plans:
            continue

        report.reconciled.append(date)
        if not callback(date):
            continue
        try:
            cache.put(date, fixed)
        except Exception as e:
            logger.error("fixup: could not write %s: %s", date, e)
            report.failed[date] = e
            continue
        report.written.append(date)

    logger.info("fixup scanned %d dates: %d to fix, %d written, %d failed",
                report.scanned, len(report.reconciled), len(report.written), len(report.failed))
    return report
