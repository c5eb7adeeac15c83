"""
Data models for the clergy roster.

Models:
- ClergyRecord: One roster entry with status, category and ministry timeline
- TimelineEvent: (year label, description) pair inside a record's timeline
- OrganizationInfo: Singleton settings document (introduction, documents, social links)

These are pure data structures - NO store logic here.
Documents use camelCase keys so existing store data loads unchanged.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional


class ClergyCategory(str, Enum):
    """Place of ministry. ALL is a filter-only sentinel."""
    ALL = "ALL"
    GENERAL_ASSEMBLY_AND_SEMINARY = "TGM_DCV"
    PARISH = "GIAO_XU"
    RELIGIOUS_ORDER = "DONG"
    RETIRED = "HUU"
    DECEASED = "QUA_DOI"


class ClergyStatus(str, Enum):
    """Ministry status shown as a colored chip in the roster."""
    ACTIVE = "DANG_MUC_VU"
    WARNING_1 = "W1"
    WARNING_2 = "W2"
    WARNING_3 = "W3"
    SUSPENDED = "TAM_HOAN"
    RETIRED = "VE_HUU"


class DocumentType(str, Enum):
    PDF = "PDF"
    DOCX = "DOCX"
    XLSX = "XLSX"


def parse_status(value) -> ClergyStatus:
    """Parse a stored status, defaulting to ACTIVE when absent or unknown."""
    try:
        return ClergyStatus(value)
    except ValueError:
        return ClergyStatus.ACTIVE


def parse_category(value) -> ClergyCategory:
    """Parse a stored category, defaulting to PARISH when absent or unknown."""
    try:
        category = ClergyCategory(value)
    except ValueError:
        return ClergyCategory.PARISH
    return ClergyCategory.PARISH if category is ClergyCategory.ALL else category


@dataclass
class TimelineEvent:
    """Single ministry timeline entry."""
    year: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {"year": self.year, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict) -> "TimelineEvent":
        return cls(year=str(data.get("year", "")), description=str(data.get("description", "")))


@dataclass
class ClergyRecord:
    """Roster entry. A record without an id is display-only sample data."""

    # Identity (assigned by the store)
    id: Optional[str] = None

    # Profile
    full_name: str = ""
    image_url: str = ""
    profile_link: str = ""
    patron_saint: str = ""
    birth_date: str = ""            # ISO date string

    # Ministry
    role: str = ""                  # free-form, see ROLE_OPTIONS
    current_location: str = ""
    ordination_date: str = ""       # ISO date string
    tenure: str = ""                # e.g. "2018 - Nay"
    category: ClergyCategory = ClergyCategory.PARISH
    status: ClergyStatus = ClergyStatus.ACTIVE
    timeline: list[TimelineEvent] = field(default_factory=list)

    def __post_init__(self):
        self.category = ClergyCategory(self.category)
        if self.category is ClergyCategory.ALL:
            raise ValueError("ALL is a filter-only category and cannot be stored")
        self.status = ClergyStatus(self.status)

    @property
    def is_persisted(self) -> bool:
        """True when the record has a store identifier."""
        return bool(self.id)

    def copy(self) -> "ClergyRecord":
        """Return an independent copy (timeline included)."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["timeline"] = [TimelineEvent(e.year, e.description) for e in self.timeline]
        return ClergyRecord(**values)

    def to_dict(self) -> dict:
        """Convert to the store document (id is kept outside the document)."""
        return {
            "fullName": self.full_name,
            "imageUrl": self.image_url,
            "profileLink": self.profile_link,
            "role": self.role,
            "currentLocation": self.current_location,
            "ordinationDate": self.ordination_date,
            "birthDate": self.birth_date,
            "patronSaint": self.patron_saint,
            "tenure": self.tenure,
            "category": self.category.value,
            "status": self.status.value,
            "timeline": [event.to_dict() for event in self.timeline],
        }

    @classmethod
    def from_dict(cls, data: dict, record_id: Optional[str] = None) -> "ClergyRecord":
        """Build a record from a store document."""
        return cls(
            id=record_id,
            full_name=data.get("fullName") or "",
            image_url=data.get("imageUrl") or "",
            profile_link=data.get("profileLink") or "",
            role=data.get("role") or "",
            current_location=data.get("currentLocation") or "",
            ordination_date=data.get("ordinationDate") or "",
            birth_date=data.get("birthDate") or "",
            patron_saint=data.get("patronSaint") or "",
            tenure=data.get("tenure") or "",
            category=parse_category(data.get("category")),
            status=parse_status(data.get("status")),
            timeline=[TimelineEvent.from_dict(e) for e in data.get("timeline") or []],
        )


@dataclass
class OrgDocument:
    """Downloadable document listed on the organization info panel."""
    id: int | str = 0
    title: str = ""
    type: DocumentType = DocumentType.PDF
    size: str = ""
    url: str = "#"

    def __post_init__(self):
        self.type = DocumentType(self.type)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "size": self.size,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrgDocument":
        try:
            doc_type = DocumentType(data.get("type", "PDF"))
        except ValueError:
            doc_type = DocumentType.PDF
        return cls(
            id=data.get("id", 0),
            title=data.get("title", ""),
            type=doc_type,
            size=data.get("size", ""),
            url=data.get("url", "#"),
        )


SOCIAL_KEYS = ("facebook", "website", "youtube")


@dataclass
class SocialLinks:
    facebook: str = "#"
    website: str = "#"
    youtube: str = "#"

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in SOCIAL_KEYS}


@dataclass
class OrganizationInfo:
    """Organization info singleton (introduction, documents, social links)."""
    introduction: str = ""
    documents: list[OrgDocument] = field(default_factory=list)
    social_links: SocialLinks = field(default_factory=SocialLinks)

    def copy(self) -> "OrganizationInfo":
        return OrganizationInfo.from_dict(self.to_dict())

    def to_dict(self) -> dict:
        return {
            "introduction": self.introduction,
            "documents": [doc.to_dict() for doc in self.documents],
            "socialLinks": self.social_links.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, defaults: Optional["OrganizationInfo"] = None) -> "OrganizationInfo":
        """Build from a stored document, filling missing fields from ``defaults``."""
        base = defaults.to_dict() if defaults else cls().to_dict()
        links = {**base["socialLinks"], **(data.get("socialLinks") or {})}
        documents = data.get("documents")
        if documents is None:
            documents = base["documents"]
        return cls(
            introduction=data.get("introduction", base["introduction"]),
            documents=[OrgDocument.from_dict(d) for d in documents],
            social_links=SocialLinks(**{key: links.get(key, "#") for key in SOCIAL_KEYS}),
        )


# =============================================================================
# CONSTANTS (for UI dropdowns and chips)
# =============================================================================

@dataclass(frozen=True)
class StatusStyle:
    label: str
    color: str          # Quasar color for chips


STATUS_STYLES = {
    ClergyStatus.ACTIVE: StatusStyle("Active", "green"),
    ClergyStatus.WARNING_1: StatusStyle("W1", "amber"),
    ClergyStatus.WARNING_2: StatusStyle("W2", "red-4"),
    ClergyStatus.WARNING_3: StatusStyle("W3", "red-7"),
    ClergyStatus.SUSPENDED: StatusStyle("Suspended", "red-10"),
    ClergyStatus.RETIRED: StatusStyle("Retired", "grey"),
}


def status_style(status) -> StatusStyle:
    """Style for a status value; unknown values fall back to ACTIVE."""
    return STATUS_STYLES[parse_status(status)]


CATEGORY_LABELS = {
    ClergyCategory.GENERAL_ASSEMBLY_AND_SEMINARY: "Archdiocese & Seminary",
    ClergyCategory.PARISH: "Parish",
    ClergyCategory.RELIGIOUS_ORDER: "Religious order",
    ClergyCategory.RETIRED: "Retired",
    ClergyCategory.DECEASED: "Deceased",
}

# Stored role values are kept as-is; only their display label is translated
ROLE_OPTIONS = [
    "Tổng Giám Mục",
    "Phó Tổng Giám Mục",
    "Giám Mục Phụ Tá",
    "Linh Mục Chánh Xứ",
    "Linh Mục Phó Xứ",
    "Linh Mục Dòng",
    "Linh Mục Tòa",
    "Phó tế",
    "Về Hưu",
]

DEFAULT_ROLE = "Linh Mục"

ROLE_LABELS = {
    "Tổng Giám Mục": "Archbishop",
    "Phó Tổng Giám Mục": "Coadjutor Archbishop",
    "Giám Mục Phụ Tá": "Auxiliary Bishop",
    "Linh Mục Chánh Xứ": "Parish Priest",
    "Linh Mục Phó Xứ": "Assistant Priest",
    "Linh Mục Dòng": "Religious Priest",
    "Linh Mục Tòa": "Cathedral Priest",
    "Phó tế": "Deacon",
    "Về Hưu": "Retired",
    DEFAULT_ROLE: "Priest",
}


def role_label(role: str) -> str:
    """Display label for a stored role; free-form roles are shown unchanged."""
    return ROLE_LABELS.get(role, role)
