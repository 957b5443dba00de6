# composer/templates.py

import logging
from dataclasses import dataclass, replace
from typing import Dict, Tuple

from composer.errors import UnsupportedTemplateError
from composer.model import (
    DEFAULT_STYLE,
    SUBJECT_STYLE,
    EmailDocument,
    Section,
)

logger = logging.getLogger(__name__)


# Only the recipient's name is filled in. Every other bracketed token
# ([Topic], [Project Name], ...) is left for the author to edit by hand.
NAME_PLACEHOLDER = "[Name]"


@dataclass(frozen=True)
class TemplateRecord:
    subject: str
    greeting: str
    content: str
    closing: str
    signature: str  # sign-off line placed above the sender block


# ============================================================
# registry
# ============================================================

TEMPLATES: Dict[str, TemplateRecord] = {
    "meeting": TemplateRecord(
        subject="Meeting Request: [Topic] Discussion",
        greeting="Dear [Name],",
        content=(
            "I hope this email finds you well. I would like to schedule a meeting "
            "to discuss [topic]. Your insights would be valuable for our upcoming project."
        ),
        closing="Looking forward to your response.",
        signature="Best regards,",
    ),
    "proposal": TemplateRecord(
        subject="Business Proposal: [Project Name]",
        greeting="Dear [Name],",
        content=(
            "I am writing to present a proposal regarding [project]. Our team has "
            "developed a comprehensive solution that addresses your specific needs."
        ),
        closing="I look forward to discussing this proposal in detail.",
        signature="Kind regards,",
    ),
    "followup": TemplateRecord(
        subject="Follow-up: [Previous Meeting/Discussion]",
        greeting="Hi [Name],",
        content=(
            "I wanted to follow up on our previous discussion about [topic]. Have you "
            "had a chance to review the information we discussed?"
        ),
        closing="Thank you for your time.",
        signature="Best,",
    ),
    "introduction": TemplateRecord(
        subject="Introduction: [Your Company] Services",
        greeting="Dear [Name],",
        content=(
            "I am reaching out to introduce [Company Name] and our services. We "
            "specialize in [industry/service] and have helped many businesses like "
            "yours achieve their goals."
        ),
        closing="I would welcome the opportunity to discuss how we can help your business.",
        signature="Warm regards,",
    ),
}


def template_types() -> Tuple[str, ...]:
    return tuple(TEMPLATES)


def get_template(template_type: str) -> TemplateRecord:
    try:
        return TEMPLATES[template_type]
    except KeyError:
        raise UnsupportedTemplateError(template_type) from None


# ============================================================
# instantiation
# ============================================================

def signature_block(prefix: str, sender_name: str, sender_role: str, company_name: str) -> str:
    return f"{prefix}\n{sender_name}\n{sender_role}\n{company_name}"


def build_sections(tpl: TemplateRecord, doc: EmailDocument) -> Tuple[Section, ...]:
    """
    Five fresh sections in fixed order with ids "1".."5".

    Greeting and signature are filled from the sender/recipient fields
    of the given document.
    """
    greeting = tpl.greeting.replace(NAME_PLACEHOLDER, doc.recipient_name, 1)
    signature = signature_block(
        tpl.signature, doc.sender_name, doc.sender_role, doc.company_name
    )

    return (
        Section("1", "subject", tpl.subject, SUBJECT_STYLE),
        Section("2", "greeting", greeting, DEFAULT_STYLE),
        Section("3", "content", tpl.content, DEFAULT_STYLE),
        Section("4", "closing", tpl.closing, DEFAULT_STYLE),
        Section("5", "signature", signature, DEFAULT_STYLE),
    )


def apply_template(doc: EmailDocument, template_type: str) -> EmailDocument:
    """
    Replace every section of the document from a registered template.

    "custom" and unknown keys have no template record; the document is
    returned unchanged. The top-level subject is left alone.
    """
    try:
        tpl = get_template(template_type)
    except UnsupportedTemplateError as e:
        logger.debug("apply_template ignored: %s", e)
        return doc

    logger.debug("Applying template %r", template_type)
    return replace(doc, template_type=template_type, sections=build_sections(tpl, doc))
