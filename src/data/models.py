"""Data models for WAC institution data."""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

SortDirection = str  # "asc" or "desc"

INSTITUTION_TYPES = ("public", "private", "community")
INSTITUTION_SIZES = ("Small", "Medium", "Large", "Very Large")
SPECIALIZATIONS = ("Generalist", "Specialized")

R1_CLASSIFICATION = "R1: Doctoral Universities – Very High Research Activity"


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude in decimal degrees."""

    lat: float
    lng: float

    @property
    def is_valid(self) -> bool:
        return -90 <= self.lat <= 90 and -180 <= self.lng <= 180


@dataclass(frozen=True)
class Institution:
    """One institution's Writing Across the Curriculum program profile.

    Nullable booleans mean "not surveyed", not "no".
    """

    # Basic information
    id: str
    name: str
    short_name: str
    state: str
    city: str
    coordinates: Optional[Coordinates] = None

    # Institutional characteristics
    institution_type: str = "public"
    carnegie_classification: str = ""
    inst_size: Optional[str] = None
    institution_type_funding: Optional[str] = None
    institution_type_mission: Optional[str] = None
    religious_affiliation: Optional[str] = None
    specialization: Optional[str] = None
    term_system: Optional[str] = None
    total_enrollment: int = 0
    undergraduate_enrollment: int = 0
    graduate_enrollment: int = 0
    founded_year: Optional[int] = None

    # WAC program details
    has_wac_program: Optional[bool] = None
    wac_program_established: Optional[int] = None
    wac_director_position: Optional[bool] = None
    wac_faculty_fte: Optional[float] = None
    wac_budget: Optional[float] = None
    writing_intensive_courses: Optional[int] = None
    required_wi_courses: Optional[int] = None
    wac_website_url: str = ""
    writing_program_structure: Optional[str] = None
    writing_program_admin: Optional[str] = None

    # Writing support services
    has_writing_center: Optional[bool] = None
    writing_center_staff: Optional[int] = None
    writing_center_hours_per_week: Optional[float] = None
    writing_fellows_program: Optional[bool] = None
    writing_tutors_available: Optional[int] = None

    # Faculty development
    faculty_workshops_per_year: Optional[int] = None
    writing_faculty_development_program: Optional[bool] = None
    cross_disciplinary_writing_initiatives: Optional[bool] = None

    # Course offerings
    has_dev_rem_writing: Optional[bool] = None
    has_fyc_required: Optional[bool] = None
    has_stretch_fyc: Optional[bool] = None
    has_upper_div_writing: Optional[bool] = None
    has_esl_undergrad_writing: Optional[bool] = None
    has_esl_grad_writing: Optional[bool] = None

    # Writing program administrator credentials
    wpa_has_rhet_comp_phd: Optional[bool] = None
    wpa_tenure_track: Optional[bool] = None
    wpa_has_release_time: Optional[bool] = None

    # Minority-serving institution designations
    is_hbcu: bool = False
    is_hsi: bool = False
    is_aanapisi: bool = False
    is_tribal: bool = False
    is_other_msi: bool = False

    program_description: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.short_name})" if self.short_name else self.name

    @property
    def location(self) -> str:
        return f"{self.city}, {self.state}"

    @property
    def is_r1(self) -> bool:
        return self.carnegie_classification == R1_CLASSIFICATION

    @property
    def is_minority_serving(self) -> bool:
        return any((self.is_hbcu, self.is_hsi, self.is_aanapisi, self.is_tribal, self.is_other_msi))


INSTITUTION_FIELD_NAMES = tuple(f.name for f in dataclasses.fields(Institution))


class BoolRequirement(Enum):
    """Tri-state constraint for a nullable boolean field."""

    UNSET = "Any"
    REQUIRE_TRUE = "Yes"
    REQUIRE_FALSE = "No"

    @classmethod
    def from_choice(cls, choice: Optional[str]) -> "BoolRequirement":
        """Map a UI label ("Any"/"Yes"/"No") to a requirement."""
        for member in cls:
            if member.value == choice:
                return member
        return cls.UNSET

    def matches(self, value: Optional[bool]) -> bool:
        if self is BoolRequirement.UNSET:
            return True
        # A null (not surveyed) value never satisfies an explicit requirement
        if value is None:
            return False
        return bool(value) == (self is BoolRequirement.REQUIRE_TRUE)


@dataclass(frozen=True)
class NumericRange:
    """Inclusive numeric bounds; a None bound is open."""

    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_bounded(self) -> bool:
        return self.min is not None or self.max is not None

    def contains(self, value: float) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


@dataclass(frozen=True)
class FilterCriteria:
    """Snapshot of every active filter constraint.

    Defaults are the widest possible; update with ``with_changes``.
    """

    search_query: str = ""

    # Multi-select fields (empty = no constraint)
    states: tuple[str, ...] = ()
    institution_types: tuple[str, ...] = ()
    carnegie_classifications: tuple[str, ...] = ()
    inst_sizes: tuple[str, ...] = ()
    institution_type_fundings: tuple[str, ...] = ()
    institution_type_missions: tuple[str, ...] = ()
    term_systems: tuple[str, ...] = ()
    writing_program_structures: tuple[str, ...] = ()
    writing_program_admins: tuple[str, ...] = ()

    # Numeric ranges
    enrollment_range: NumericRange = field(default_factory=NumericRange)
    established_year_range: NumericRange = field(default_factory=NumericRange)
    budget_range: NumericRange = field(default_factory=NumericRange)
    include_unreported: bool = True

    # WAC program and writing support
    has_wac_program: BoolRequirement = BoolRequirement.UNSET
    has_writing_center: BoolRequirement = BoolRequirement.UNSET
    has_writing_fellows: BoolRequirement = BoolRequirement.UNSET
    has_faculty_development: BoolRequirement = BoolRequirement.UNSET

    # Course offerings
    has_dev_rem_writing: BoolRequirement = BoolRequirement.UNSET
    has_fyc_required: BoolRequirement = BoolRequirement.UNSET
    has_stretch_fyc: BoolRequirement = BoolRequirement.UNSET
    has_upper_div_writing: BoolRequirement = BoolRequirement.UNSET
    has_esl_undergrad_writing: BoolRequirement = BoolRequirement.UNSET
    has_esl_grad_writing: BoolRequirement = BoolRequirement.UNSET

    # Minority-serving "show only" toggles
    show_only_hbcu: bool = False
    show_only_hsi: bool = False
    show_only_aanapisi: bool = False
    show_only_tribal: bool = False
    show_only_msi: bool = False

    def with_changes(self, **changes) -> "FilterCriteria":
        """Return a copy with the given fields replaced."""
        for key in ("states", "institution_types", "carnegie_classifications", "inst_sizes",
                    "institution_type_fundings", "institution_type_missions", "term_systems",
                    "writing_program_structures", "writing_program_admins"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class SortSpecification:
    """Field and direction for table sorting."""

    field: str = "name"
    direction: SortDirection = "asc"

    def __post_init__(self):
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction: {self.direction!r}")


@dataclass(frozen=True)
class CategoryCount:
    """Count and formatted share of one category value."""

    count: int
    percentage: str


@dataclass(frozen=True)
class DataIntegrity:
    all_have_wac_program_flag: bool
    all_have_writing_center_flag: bool
    all_have_valid_coordinates: bool
    total_records_processed: int


@dataclass(frozen=True)
class GroundTruthCounts:
    total_institutions: int
    wac_programs: int
    writing_centers: int
    r1_institutions: int
    r1_institution_names: list[str]
    carnegie_classifications: int
    institution_types: int
    states_represented: int


@dataclass(frozen=True)
class ValidationMetadata:
    """Integrity checks and ground-truth counts attached to statistics."""

    calculated_at: str
    data_integrity: DataIntegrity
    ground_truth: GroundTruthCounts


@dataclass
class InstitutionStatistics:
    """Summary counts, averages, and breakdowns for a record sequence."""

    total_institutions: int
    with_wac_programs: int
    wac_program_percentage: str
    with_writing_centers: int
    writing_center_percentage: str
    average_enrollment: float
    average_wac_budget: float
    total_writing_intensive_courses: int
    institutions_by_type: dict[str, CategoryCount] = field(default_factory=dict)
    carnegie_classification_stats: dict[str, CategoryCount] = field(default_factory=dict)
    simplified_carnegie_stats: dict[str, CategoryCount] = field(default_factory=dict)
    institutions_by_size: dict[str, CategoryCount] = field(default_factory=dict)
    institutions_by_state: dict[str, CategoryCount] = field(default_factory=dict)
    metadata: Optional[ValidationMetadata] = None
