"""Default show checklist based on Kennel Club regulations.

Every show is seeded from DEFAULT_CHECKLIST_ITEMS. Items with an
auto_detect_key complete themselves when the matching automation signal is
true. relative_due_days counts days before the show date; negative values
fall after the show.

Bump CATALOG_VERSION whenever blueprints are added, removed or reworded.
Seeded items record the version they were created from, and re-seeding
never rewrites existing items.
"""
from dataclasses import dataclass

from showcompliance.models.checklist import Phase

CATALOG_VERSION = 1

# Per-judge instances of a blueprint take consecutive slots in a band of
# this width, so blueprint N occupies sort orders N*100 .. N*100+99.
SORT_ORDER_STRIDE = 100


@dataclass(frozen=True)
class ChecklistTemplateItem:
    """Blueprint for one checklist task, independent of any show."""

    key: str
    title: str
    phase: Phase
    sort_order: int
    relative_due_days: int
    description: str | None = None
    auto_detect_key: str | None = None
    championship_only: bool = False
    requires_document: bool = False
    has_expiry: bool = False
    per_judge: bool = False


@dataclass(frozen=True)
class PhaseConfig:
    label: str
    sort_order: int


PHASE_CONFIG: dict[Phase, PhaseConfig] = {
    Phase.pre_planning: PhaseConfig("12+ Months Out", 0),
    Phase.planning: PhaseConfig("6-12 Months Out", 1),
    Phase.pre_show: PhaseConfig("2-8 Weeks Out", 2),
    Phase.final_prep: PhaseConfig("Final 2 Weeks", 3),
    Phase.show_day: PhaseConfig("Show Day", 4),
    Phase.post_show: PhaseConfig("After the Show", 5),
}


def ordered_phases() -> list[Phase]:
    """Phases in their canonical planning order."""
    return sorted(PHASE_CONFIG, key=lambda phase: PHASE_CONFIG[phase].sort_order)


DEFAULT_CHECKLIST_ITEMS: tuple[ChecklistTemplateItem, ...] = (
    # Pre-planning: 12+ months out
    ChecklistTemplateItem(
        key="apply_kc_licence",
        title="Apply for KC show licence",
        description=(
            "Submit the licence application and fee to the Kennel Club. "
            "Regulation F4 requires this at least 12 months before the show date."
        ),
        phase=Phase.pre_planning,
        sort_order=0,
        relative_due_days=365,
    ),
    ChecklistTemplateItem(
        key="send_judge_offers",
        title="Send judge offer letters",
        description=(
            "Send written offers to proposed judges. This is stage 1 of the "
            "mandatory three-part contract process."
        ),
        phase=Phase.pre_planning,
        sort_order=1,
        relative_due_days=365,
        auto_detect_key="judge_offers_sent",
    ),
    ChecklistTemplateItem(
        key="confirm_venue",
        title="Confirm venue",
        description=(
            "Book and confirm the show venue. Check it meets KC requirements "
            "for space, access and facilities."
        ),
        phase=Phase.pre_planning,
        sort_order=2,
        relative_due_days=300,
        auto_detect_key="venue_set",
    ),
    ChecklistTemplateItem(
        key="public_liability_insurance",
        title="Obtain public liability insurance",
        description=(
            "Mandatory: without current insurance the show licence is invalid. "
            "The certificate must be displayed at the venue on show day."
        ),
        phase=Phase.pre_planning,
        sort_order=3,
        relative_due_days=180,
        requires_document=True,
        has_expiry=True,
    ),
    # Planning: 6-12 months out
    ChecklistTemplateItem(
        key="receive_judge_acceptances",
        title="Receive judge acceptance letters",
        description=(
            "Stage 2 of the three-part contract: judges return written "
            "acceptance. Championship CC judges may also need KC committee approval."
        ),
        phase=Phase.planning,
        sort_order=0,
        relative_due_days=270,
        requires_document=True,
        per_judge=True,
    ),
    ChecklistTemplateItem(
        key="send_judge_confirmations",
        title="Send judge confirmation letters",
        description=(
            "Stage 3 of the three-part contract: the society confirms the "
            "appointment in writing to each judge."
        ),
        phase=Phase.planning,
        sort_order=1,
        relative_due_days=240,
        per_judge=True,
    ),
    ChecklistTemplateItem(
        key="record_kc_licence",
        title="Record KC licence number",
        description="Once the licence is approved, enter the KC licence number in the show details.",
        phase=Phase.planning,
        sort_order=2,
        relative_due_days=240,
        auto_detect_key="kc_licence_recorded",
    ),
    ChecklistTemplateItem(
        key="venue_risk_assessment",
        title="Complete venue risk assessment",
        description=(
            "Risk assessment and fire safety assessment of the venue. "
            "Must be available on show day."
        ),
        phase=Phase.planning,
        sort_order=3,
        relative_due_days=120,
        requires_document=True,
    ),
    ChecklistTemplateItem(
        key="order_awards",
        title="Order rosettes, trophies and special awards",
        description="Including perpetual trophies, junior handling awards and special prizes.",
        phase=Phase.planning,
        sort_order=4,
        relative_due_days=120,
    ),
    ChecklistTemplateItem(
        key="source_sponsors",
        title="Source sponsors and donations",
        description="Approach sponsors for prizes, donations or advertising in the catalogue.",
        phase=Phase.planning,
        sort_order=5,
        relative_due_days=90,
    ),
    ChecklistTemplateItem(
        key="awards_board",
        title="Arrange awards board",
        description="Commission or prepare the awards display board for results.",
        phase=Phase.planning,
        sort_order=6,
        relative_due_days=90,
    ),
    # Pre-show: 2-8 weeks out
    ChecklistTemplateItem(
        key="set_up_classes",
        title="Set up show classes",
        description=(
            "Create all breed classes, entry fees and special classes "
            "(junior handling, etc.)."
        ),
        phase=Phase.pre_show,
        sort_order=0,
        relative_due_days=56,
        auto_detect_key="classes_created",
    ),
    ChecklistTemplateItem(
        key="publish_schedule",
        title="Publish schedule",
        description=(
            "Make the show live so exhibitors can view classes and judges. "
            "Upload a PDF schedule if required."
        ),
        phase=Phase.pre_show,
        sort_order=1,
        relative_due_days=42,
        auto_detect_key="show_published",
    ),
    ChecklistTemplateItem(
        key="open_entries",
        title="Open entries",
        description=(
            "Open entries for exhibitors. Online entries can remain open until "
            "at least 14 days before the show."
        ),
        phase=Phase.pre_show,
        sort_order=2,
        relative_due_days=42,
        auto_detect_key="entries_opened",
    ),
    ChecklistTemplateItem(
        key="veterinary_cover",
        title="Arrange veterinary cover",
        description="Confirm a vet will be available or on call on show day.",
        phase=Phase.pre_show,
        sort_order=3,
        relative_due_days=28,
    ),
    ChecklistTemplateItem(
        key="judge_travel",
        title="Book judges hotel and travel",
        description="Arrange accommodation and travel for judges attending from out of area.",
        phase=Phase.pre_show,
        sort_order=4,
        relative_due_days=28,
        per_judge=True,
    ),
    ChecklistTemplateItem(
        key="assign_stewards",
        title="Assign stewards",
        description="Assign stewards to rings, with enough stewards for each ring.",
        phase=Phase.pre_show,
        sort_order=5,
        relative_due_days=21,
        auto_detect_key="stewards_assigned",
    ),
    ChecklistTemplateItem(
        key="challenge_certificates",
        title="Obtain challenge certificates from KC",
        description="Championship shows only: request and receive the physical CCs from the Kennel Club.",
        phase=Phase.pre_show,
        sort_order=6,
        relative_due_days=21,
        championship_only=True,
    ),
    ChecklistTemplateItem(
        key="refreshments",
        title="Arrange refreshments for judges and stewards",
        description="Organise food, drinks and hospitality for judges and stewards on show day.",
        phase=Phase.pre_show,
        sort_order=7,
        relative_due_days=14,
    ),
    # Final prep: last 2 weeks
    ChecklistTemplateItem(
        key="close_entries",
        title="Close entries",
        description="KC regulations require entries to close at least 14 days before the show date.",
        phase=Phase.final_prep,
        sort_order=0,
        relative_due_days=14,
        auto_detect_key="entries_closed",
    ),
    ChecklistTemplateItem(
        key="assign_judges",
        title="Assign judges to breeds and rings",
        description="Map each judge to their assigned breeds and ring numbers.",
        phase=Phase.final_prep,
        sort_order=1,
        relative_due_days=10,
        auto_detect_key="judges_assigned",
    ),
    ChecklistTemplateItem(
        key="ring_plan",
        title="Finalise ring plan",
        description="Set up numbered rings and assign breeds and classes to them.",
        phase=Phase.final_prep,
        sort_order=2,
        relative_due_days=7,
        auto_detect_key="rings_created",
    ),
    ChecklistTemplateItem(
        key="print_catalogue",
        title="Generate and print catalogue",
        description="Assign catalogue numbers and generate the show catalogue for printing.",
        phase=Phase.final_prep,
        sort_order=3,
        relative_due_days=7,
    ),
    ChecklistTemplateItem(
        key="entry_passes",
        title="Prepare exhibitor entry passes",
        description="Print or prepare entry passes and confirmations for exhibitors.",
        phase=Phase.final_prep,
        sort_order=4,
        relative_due_days=7,
    ),
    ChecklistTemplateItem(
        key="advise_judges_entries",
        title="Advise judges of entry numbers",
        description="Send judges the number of entries in each class they are judging.",
        phase=Phase.final_prep,
        sort_order=5,
        relative_due_days=7,
        per_judge=True,
    ),
    # Show day
    ChecklistTemplateItem(
        key="display_insurance",
        title="Display insurance certificate",
        description="Public liability insurance must be displayed prominently at the venue.",
        phase=Phase.show_day,
        sort_order=0,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_kc_licence",
        title="Bring KC licence",
        description="Have the KC licence available, electronic or printed, at the show.",
        phase=Phase.show_day,
        sort_order=1,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_incident_book",
        title="Bring incident book",
        description=(
            "The official KC incident book must be present. Record any "
            "incidents that occur during the show."
        ),
        phase=Phase.show_day,
        sort_order=2,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_regulations",
        title="Bring KC regulations and breed standards",
        description="Have the KC Year Book, regulations and relevant breed standards available.",
        phase=Phase.show_day,
        sort_order=3,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_first_aid",
        title="Bring first aid kit",
        description="A first aid box must be available at the venue.",
        phase=Phase.show_day,
        sort_order=4,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_ring_equipment",
        title="Bring ring equipment and numbers",
        description="Ring markers, number boards, ring ropes or barriers, exhibitor numbers.",
        phase=Phase.show_day,
        sort_order=5,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_cash_float",
        title="Bring cash float",
        description="Cash for catalogue sales and membership forms on the day.",
        phase=Phase.show_day,
        sort_order=6,
        relative_due_days=0,
    ),
    ChecklistTemplateItem(
        key="bring_safety_assessments",
        title="Bring risk and fire safety assessments",
        description="Both documents must be available at the venue on the day.",
        phase=Phase.show_day,
        sort_order=7,
        relative_due_days=0,
    ),
    # Post-show
    ChecklistTemplateItem(
        key="entry_analysis_form",
        title="Submit entry analysis form to KC",
        description="Due to the KC Regional Support Advisor within 14 days of the show.",
        phase=Phase.post_show,
        sort_order=0,
        relative_due_days=-14,
    ),
    ChecklistTemplateItem(
        key="marked_catalogue",
        title="Submit marked catalogue to KC",
        description=(
            "Championship shows only: marked-up catalogue, absentee report and "
            "additional fee form due within 14 days."
        ),
        phase=Phase.post_show,
        sort_order=1,
        relative_due_days=-14,
        championship_only=True,
    ),
    ChecklistTemplateItem(
        key="judge_thank_you",
        title="Send judge thank-you letters",
        description="Send written thanks to every judge, with expenses if not already settled.",
        phase=Phase.post_show,
        sort_order=2,
        relative_due_days=-7,
        per_judge=True,
    ),
    ChecklistTemplateItem(
        key="archive_records",
        title="Archive show records",
        description=(
            "Keep the marked catalogue indefinitely, and schedules and entry "
            "forms for at least a year."
        ),
        phase=Phase.post_show,
        sort_order=3,
        relative_due_days=-30,
    ),
)
