# composer/model.py

from dataclasses import dataclass, field
from typing import Tuple


# ============================================================
# vocabularies
# ============================================================

TEMPLATE_TYPES = ("meeting", "proposal", "followup", "introduction", "custom")

SECTION_TYPES = ("subject", "greeting", "content", "closing", "signature")

ALIGNMENTS = ("left", "center", "right")

# Small / Medium / Large / Extra Large as offered by the editor.
FONT_SIZES = ("14px", "16px", "20px", "24px")

SUBJECT_FONT_SIZE = "18px"


# ============================================================
# value types
# ============================================================

@dataclass(frozen=True)
class TextStyle:
    color: str = "#374151"
    font_size: str = "16px"
    align: str = "left"
    bold: bool = False


DEFAULT_STYLE = TextStyle()
SUBJECT_STYLE = TextStyle(font_size=SUBJECT_FONT_SIZE, bold=True)


@dataclass(frozen=True)
class Section:
    """One ordered, independently styled block of the email body."""

    id: str
    type: str
    content: str
    style: TextStyle = DEFAULT_STYLE


@dataclass(frozen=True)
class EmailDocument:
    """
    The email being authored: metadata plus ordered sections.

    Instances are never mutated. Editing operations return a new document
    built with dataclasses.replace(); sections that an operation does not
    touch are carried over as the same objects.
    """

    template_type: str = "meeting"
    subject: str = ""
    recipient_name: str = ""
    recipient_role: str = ""
    sender_name: str = ""
    sender_role: str = ""
    company_name: str = ""
    header_image: str = ""
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    def section_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self.sections)

    def sections_of_type(self, section_type: str) -> Tuple[Section, ...]:
        return tuple(s for s in self.sections if s.type == section_type)

    def index_of(self, section_id: str) -> int:
        """Position of the section in rendering order, or -1."""
        for i, s in enumerate(self.sections):
            if s.id == section_id:
                return i
        return -1


# ============================================================
# initial editor state
# ============================================================

DEFAULT_HEADER_IMAGE = (
    "https://images.unsplash.com/photo-1486406146926-c627a92ad1ab"
    "?w=800&auto=format&fit=crop&q=80"
)

DEFAULT_SUBJECT = "Meeting Request: Quarterly Review Discussion"


def default_document() -> EmailDocument:
    """The document a fresh editor session starts from."""
    return EmailDocument(
        template_type="meeting",
        subject=DEFAULT_SUBJECT,
        recipient_name="John",
        recipient_role="Project Manager",
        sender_name="Sarah Wilson",
        sender_role="Business Development Manager",
        company_name="Tech Solutions Inc.",
        header_image=DEFAULT_HEADER_IMAGE,
        sections=(
            Section("1", "subject", DEFAULT_SUBJECT, SUBJECT_STYLE),
            Section("2", "greeting", "Dear John,"),
            Section(
                "3",
                "content",
                "I hope this email finds you well. I would like to schedule a "
                "meeting to discuss our quarterly review. Your insights would be "
                "valuable for our upcoming planning phase.",
            ),
            Section("4", "closing", "Looking forward to your response."),
            Section(
                "5",
                "signature",
                "Best regards,\nSarah Wilson\nBusiness Development Manager\nTech Solutions Inc.",
            ),
        ),
    )
