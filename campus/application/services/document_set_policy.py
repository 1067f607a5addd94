"""Document set policy: pure validation of the documents attached to a student.

Called by the upload form (advisory) and at application conversion, where a
failure blocks the conversion.
"""

from collections import Counter
from collections.abc import Iterable

from campus.domain.enums import DocumentType
from campus.domain.exceptions import PolicyException, ValidationException

REQUIRED_TYPES: tuple[DocumentType, ...] = (
    DocumentType.PASSPORT,
    DocumentType.SIGNATURE,
    DocumentType.ACADEMIC_RESULT,
    DocumentType.BIRTH_OR_AGE,
)
# Required types + sponsorship letter + one optional supporting slot.
MAX_TOTAL_DOCS = len(REQUIRED_TYPES) + 2
POLICY_NAME = "document_set"


def parse_document_types(raw: Iterable[str | DocumentType]) -> list[DocumentType]:
    """Convert raw tags to DocumentType; unknown tags are a validation error."""
    parsed: list[DocumentType] = []
    for tag in raw:
        try:
            parsed.append(DocumentType(tag))
        except ValueError:
            raise ValidationException(
                f"Unknown document type: {tag}", field="doc_types"
            ) from None
    return parsed


def validate_document_set(
    doc_types: Iterable[str | DocumentType], sponsored: bool
) -> None:
    """Validate a document set; raise PolicyException with the first failing rule.

    Rules, in order: no duplicates (the optional supporting slot is checked
    separately), all required types present, sponsorship letter present when
    sponsored, at most MAX_TOTAL_DOCS documents, at most one optional
    supporting document.

    Raises:
        ValidationException: If a tag is not a known document type.
        PolicyException: If the set violates a rule.
    """
    present = parse_document_types(doc_types)
    counts = Counter(present)

    for doc_type, count in counts.items():
        if doc_type is not DocumentType.SUPPORTING_OPTIONAL and count > 1:
            raise PolicyException(
                "Duplicate document types are not allowed.", POLICY_NAME
            )

    for required in REQUIRED_TYPES:
        if required not in counts:
            raise PolicyException(
                f"Missing required document: {required.value}", POLICY_NAME
            )

    if sponsored and DocumentType.SPONSORSHIP_LETTER not in counts:
        raise PolicyException(
            "Sponsorship letter is required for sponsored students.", POLICY_NAME
        )

    if len(present) > MAX_TOTAL_DOCS:
        raise PolicyException(
            f"Maximum {MAX_TOTAL_DOCS} documents allowed.", POLICY_NAME
        )

    if counts[DocumentType.SUPPORTING_OPTIONAL] > 1:
        raise PolicyException(
            "Only one optional supporting document is allowed.", POLICY_NAME
        )
