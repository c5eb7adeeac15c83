"""Built-in data shown when the store cannot be reached, and blank defaults."""

from clergy_roster.store.models import (
    DEFAULT_ROLE,
    ClergyCategory,
    ClergyRecord,
    ClergyStatus,
    DocumentType,
    OrganizationInfo,
    OrgDocument,
    SocialLinks,
    TimelineEvent,
)


def fallback_roster() -> list[ClergyRecord]:
    """Sample records with no identifiers (display-only)."""
    return [
        ClergyRecord(
            full_name="Phêrô Nguyễn Văn A",
            image_url="https://picsum.photos/200",
            profile_link="https://example.com/cha-a",
            role="Linh Mục",
            current_location="Giáo xứ Chính Tòa",
            ordination_date="2010-06-29",
            birth_date="1980-05-15",
            patron_saint="Thánh Phêrô",
            tenure="2018 - Nay",
            category=ClergyCategory.PARISH,
            status=ClergyStatus.ACTIVE,
            timeline=[
                TimelineEvent("2010-2014", "Phó xứ Giáo xứ A"),
                TimelineEvent("2014-2018", "Du học Roma"),
            ],
        ),
        ClergyRecord(
            full_name="Giuse Trần Văn B",
            image_url="https://picsum.photos/201",
            profile_link="https://example.com/cha-b",
            role="Giám mục",
            current_location="Đại Chủng Viện",
            ordination_date="2005-06-29",
            birth_date="1975-12-20",
            patron_saint="Thánh Giuse",
            tenure="2015 - Nay",
            category=ClergyCategory.GENERAL_ASSEMBLY_AND_SEMINARY,
            status=ClergyStatus.ACTIVE,
            timeline=[TimelineEvent("2005-2010", "Phó xứ Giáo xứ B")],
        ),
    ]


def blank_record() -> ClergyRecord:
    """Starting point for add mode."""
    return ClergyRecord(
        image_url="https://picsum.photos/300",
        role=DEFAULT_ROLE,
        category=ClergyCategory.PARISH,
        status=ClergyStatus.ACTIVE,
    )


DEFAULT_INTRODUCTION = (
    "AOS là cộng đồng truyền giáo qua nền tảng game Roblox, nơi đức tin Công giáo "
    "được gieo mầm giữa không gian sáng tạo và kết nối của giới trẻ. Qua các hoạt động "
    "trong game, sinh hoạt cộng đồng và tinh thần bác ái, AOS mong muốn mang Tin Mừng "
    "đến gần hơn với mọi người bằng ngôn ngữ của thời đại số.\n"
    "Cộng đồng chọn chân phước Carlo Acutis làm thánh bổn mạng – người trẻ đã dùng "
    "công nghệ và internet để loan báo đức tin."
)


def default_org_info() -> OrganizationInfo:
    """Organization info used until the settings document is written."""
    return OrganizationInfo(
        introduction=DEFAULT_INTRODUCTION,
        documents=[
            OrgDocument(1, "Quy chế Hoạt động AoS 2024", DocumentType.PDF, "2.5 MB", "#"),
            OrgDocument(2, "Mẫu đơn xin gia nhập", DocumentType.DOCX, "500 KB", "#"),
            OrgDocument(3, "Lịch Phụng vụ & Sự kiện 2026", DocumentType.XLSX, "1.2 MB", "#"),
            OrgDocument(4, "Hướng dẫn Mục vụ Di dân", DocumentType.PDF, "3.0 MB", "#"),
        ],
        social_links=SocialLinks(facebook="#", website="#", youtube="#"),
    )
