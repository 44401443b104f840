"""System prompts for the chat assistant."""

from dataclasses import dataclass
from typing import Sequence

from src.data.fields import format_field_value
from src.data.models import Institution
from src.data.statistics import calculate_statistics, generate_data_summary

DISABLED = "disabled"
USER_CONTROLLED = "user-controlled"
AUTO_ROUTE = "auto-route"
CHAT_MODES = (DISABLED, USER_CONTROLLED, AUTO_ROUTE)

INSTITUTION_DATA = "institution-data"
RESEARCH_LIBRARY = "research-library"

# Lower-cased phrases that mark a reply as drawing on the research library
RESEARCH_INDICATORS = (
    "research library",
    "source 2",
    "research from your",
    "according to research",
    "notebook",
)

# Fields listed per institution in the prompt, in order
PROMPT_FIELDS = [
    ("Location", None),
    ("Type", "institution_type"),
    ("Carnegie Classification", "carnegie_classification"),
    ("Total Enrollment", "total_enrollment"),
    ("Undergraduate", "undergraduate_enrollment"),
    ("Graduate", "graduate_enrollment"),
    ("WAC Program", "has_wac_program"),
    ("WAC Program Established", "wac_program_established"),
    ("WAC Budget", "wac_budget"),
    ("Writing Intensive Courses", "writing_intensive_courses"),
    ("Required WI Courses", "required_wi_courses"),
    ("Writing Center", "has_writing_center"),
    ("Writing Center Staff", "writing_center_staff"),
    ("Writing Tutors Available", "writing_tutors_available"),
    ("Faculty Workshops Per Year", "faculty_workshops_per_year"),
]

DATA_ONLY_PROMPT = """You are a helpful WAC Dashboard assistant. You help users explore and analyze Writing Across the Curriculum (WAC) programs at different institutions.

{data_section}

Answer questions accurately based on this data. If asked about an institution not in the dataset, politely explain that you only have data for these {count} institutions. Be specific and cite numbers when available."""

RESEARCH_PROMPT = """You are a WAC Dashboard assistant with TWO knowledge sources available:

SOURCE 1 - INSTITUTION DATA (Embedded, Always Use):
{data_section}

SOURCE 2 - RESEARCH LIBRARY:
You have access to the "{library}" research library containing:
- Research papers on WAC pedagogy
- Program assessment studies
- Best practices guides
- Case studies from various institutions
- Theoretical frameworks for writing instruction

The user has asked for research to be included. Consult the library for every question without asking for permission.

WORKFLOW:
1. ANSWER using institution data (SOURCE 1) if the question relates to the {count} institutions in the dataset
2. ADD research context, pedagogy, or best practices from the "{library}" library (SOURCE 2)
3. COMBINE insights from both sources in a single response
4. CITE which information comes from which source

Answer questions comprehensively, drawing on both quantitative data and qualitative research."""

AUTO_ROUTE_PROMPT = """You are a WAC Dashboard assistant with TWO knowledge sources available:

SOURCE 1 - INSTITUTION DATA (Embedded, Always Available):
{data_section}

SOURCE 2 - RESEARCH LIBRARY (Consult when needed):
The "{library}" library holds WAC research, pedagogy, case studies, and best practices.

ROUTING - decide which source each question needs:

1. QUANTITATIVE questions (counts, budgets, lists, comparisons, statistics, "how many", "what is")
   Use SOURCE 1 only.
   Examples: "How many R1 institutions?", "What's MIT's budget?", "List institutions in California"

2. QUALITATIVE questions (best practices, pedagogy, theory, "why", "how should", recommendations)
   Consult SOURCE 2 for research-backed insights.
   Examples: "What are best practices for faculty development?", "How should programs assess writing?"

3. HYBRID questions (comparing practices to data, recommendations based on both)
   Use BOTH sources.
   Examples: "Which institutions follow best practices?", "Recommend a program similar to MIT's based on research"

Always indicate which sources you used in your response."""


@dataclass(frozen=True)
class PromptOptions:
    """How the assistant should treat the research library for one request."""

    mode: str = USER_CONTROLLED
    include_research: bool = False
    research_library: str = "Writing Sites"

    def __post_init__(self):
        if self.mode not in CHAT_MODES:
            raise ValueError(f"Unknown chat mode: {self.mode}")

    @property
    def uses_research(self) -> bool:
        """True when the prompt offers the research library at all."""
        if self.mode == DISABLED:
            return False
        if self.mode == AUTO_ROUTE:
            return True
        return self.include_research


def format_institution_block(inst: Institution) -> str:
    """One bulleted block describing an institution."""
    lines = [f"- {inst.name} ({inst.short_name})"]
    for label, field in PROMPT_FIELDS:
        if field is None:
            value = inst.location
        else:
            value = format_field_value(field, getattr(inst, field))
        lines.append(f"  * {label}: {value}")
    return "\n".join(lines)


def build_data_section(records: Sequence[Institution]) -> str:
    """Ground-truth summary, per-institution details and program descriptions."""
    summary = generate_data_summary(calculate_statistics(records, include_metadata=True))
    details = "\n\n".join(format_institution_block(inst) for inst in records)
    descriptions = "\n".join(
        f"{inst.id.upper()}: {inst.program_description}"
        for inst in records
        if inst.program_description
    )
    return (
        f"{summary}\n\nDETAILED INSTITUTION DATA:\n{details}\n\n"
        f"DETAILED PROGRAM DESCRIPTIONS:\n{descriptions}"
    )


def build_system_prompt(records: Sequence[Institution], options: PromptOptions) -> str:
    """
    Build the system prompt for a chat request.

    Args:
        records: Institutions the assistant may talk about
        options: Chat mode and research library settings

    Returns:
        Prompt text embedding the ground-truth summary and every institution
    """
    template = DATA_ONLY_PROMPT
    if options.mode == AUTO_ROUTE:
        template = AUTO_ROUTE_PROMPT
    elif options.uses_research:
        template = RESEARCH_PROMPT

    return template.format(
        data_section=build_data_section(records),
        count=len(records),
        library=options.research_library,
    )


def max_tokens_for(options: PromptOptions, settings) -> int:
    """Response budget: larger when research may be consulted."""
    if options.uses_research:
        return settings.MAX_TOKENS_WITH_RESEARCH
    return settings.MAX_TOKENS_WITHOUT_RESEARCH


def detect_sources(text: str, options: PromptOptions) -> list[str]:
    """Knowledge sources a reply appears to draw on. Institution data is always one."""
    sources = [INSTITUTION_DATA]
    if options.mode == DISABLED:
        return sources

    lowered = text.lower()
    if options.research_library.lower() in lowered or any(
        indicator in lowered for indicator in RESEARCH_INDICATORS
    ):
        sources.append(RESEARCH_LIBRARY)
    return sources
