"""Seed a show's checklist from the template catalog."""
import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from showcompliance.checklist.deadlines import calculate_due_date
from showcompliance.checklist.errors import DuplicateSeed
from showcompliance.checklist.templates import (
    CATALOG_VERSION,
    DEFAULT_CHECKLIST_ITEMS,
    SORT_ORDER_STRIDE,
    ChecklistTemplateItem,
)
from showcompliance.models import ChecklistItem, ChecklistStatus, Phase, Show

logger = logging.getLogger(__name__)

JUDGE_ENTITY = "judge"
SEED_ATTEMPTS = 3


def _next_free_slot(used: set[int], template_sort_order: int) -> int:
    """First unused sort order in the blueprint's band, or past the end of the phase."""
    start = template_sort_order * SORT_ORDER_STRIDE
    for slot in range(start, start + SORT_ORDER_STRIDE):
        if slot not in used:
            return slot
    return max(used) + 1


def _instantiate(
    show: Show,
    template: ChecklistTemplateItem,
    sort_order: int,
    judge_name: str | None = None,
) -> ChecklistItem:
    title = template.title
    if judge_name is not None:
        title = f"{template.title} - {judge_name}"

    return ChecklistItem(
        show_id=show.id,
        template_key=template.key,
        template_version=CATALOG_VERSION,
        entity_type=JUDGE_ENTITY if judge_name is not None else None,
        entity_name=judge_name,
        entity_key=judge_name or "",
        title=title,
        description=template.description,
        phase=template.phase,
        sort_order=sort_order,
        status=ChecklistStatus.not_started,
        due_date=calculate_due_date(show.start_date, template.relative_due_days),
        auto_detect_key=template.auto_detect_key,
        requires_document=template.requires_document,
        has_expiry=template.has_expiry,
    )


def plan_checklist_items(
    show: Show,
    judge_names: Sequence[str],
    existing: Iterable[ChecklistItem],
    catalog: Sequence[ChecklistTemplateItem] = DEFAULT_CHECKLIST_ITEMS,
) -> list[ChecklistItem]:
    """
    Work out which checklist items a seed should create.

    A show without items gets the full catalog. A show that already has
    items only gets per-judge items for judges assigned since the last
    seed; nothing else is added or rewritten, so items a secretary deleted
    stay deleted.

    Championship-only blueprints are skipped for other show types.
    """
    seeded: set[tuple[str, str]] = set()
    used_sort_orders: dict[Phase, set[int]] = defaultdict(set)
    has_items = False
    for item in existing:
        has_items = True
        used_sort_orders[Phase(item.phase)].add(item.sort_order)
        if item.template_key:
            seeded.add((item.template_key, item.entity_key))

    planned: list[ChecklistItem] = []
    for template in catalog:
        if template.championship_only and not show.is_championship:
            continue
        if has_items and not template.per_judge:
            continue

        used = used_sort_orders[template.phase]
        if template.per_judge:
            for name in judge_names:
                if (template.key, name) in seeded:
                    continue
                sort_order = _next_free_slot(used, template.sort_order)
                planned.append(_instantiate(show, template, sort_order, judge_name=name))
                used.add(sort_order)
                seeded.add((template.key, name))
        else:
            sort_order = _next_free_slot(used, template.sort_order)
            planned.append(_instantiate(show, template, sort_order))
            used.add(sort_order)
            seeded.add((template.key, ""))

    return planned


def persist_seeded_items(session: Session, items: list[ChecklistItem]) -> None:
    """
    Insert seeded items in a single transaction.

    Raises DuplicateSeed if the storage layer rejects the batch because a
    concurrent seed got there first. Nothing from the batch is kept.
    """
    session.add_all(items)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise DuplicateSeed("Checklist items were already seeded by another request") from e


def seed_checklist(
    session: Session,
    show: Show,
    catalog: Sequence[ChecklistTemplateItem] = DEFAULT_CHECKLIST_ITEMS,
) -> list[ChecklistItem]:
    """
    Seed the show's checklist, or fill per-judge gaps if it already exists.

    Safe to call repeatedly: a second call creates nothing unless judges
    were added in between. Returns the items created by this call.

    A concurrent seed or gap fill can claim the same items or sort order
    slots first. The batch is then rolled back and planned again from the
    items now stored, until nothing is left to add.
    """
    for _ in range(SEED_ATTEMPTS):
        existing = session.exec(
            select(ChecklistItem).where(ChecklistItem.show_id == show.id)
        ).all()
        judge_names = show.judge_names()

        items = plan_checklist_items(show, judge_names, existing, catalog)
        if not items:
            logger.debug(f"Checklist for {show.name} is up to date, nothing to seed")
            return []

        try:
            persist_seeded_items(session, items)
        except DuplicateSeed:
            logger.warning(f"Concurrent seed detected for {show.name} ({show.id}), replanning")
            continue

        if existing:
            logger.info(f"Added {len(items)} per-judge checklist items for {show.name}")
        else:
            logger.info(f"Seeded {len(items)} checklist items for {show.name}")
        return items

    logger.error(f"Gave up seeding {show.name} ({show.id}) after {SEED_ATTEMPTS} conflicts")
    return []
