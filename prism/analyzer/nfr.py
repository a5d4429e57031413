"""Deterministic non-functional requirement suggestions.

Maps extracted actions to a fixed catalogue of NFRs. LLM suggestions, when
available, are appended to this baseline by :mod:`prism.engine`.
"""

from __future__ import annotations

from .models import ExtractedEntities, NfrCategory, NfrPriority, NonFunctionalRequirement

_AUTHENTICATION_NFRS = (
    NonFunctionalRequirement(
        category=NfrCategory.SECURITY,
        requirement=(
            "The system shall implement secure authentication with "
            "multi-factor authentication options"
        ),
        rationale="Login functionality requires strong security to protect user accounts",
        acceptance_criteria=[
            "Support for 2FA/MFA authentication methods",
            "Password complexity requirements enforced",
            "Account lockout after failed attempts",
        ],
        priority=NfrPriority.MUST_HAVE,
    ),
    NonFunctionalRequirement(
        category=NfrCategory.PERFORMANCE,
        requirement="Authentication process shall complete within 2 seconds under normal load",
        rationale="Users expect quick login response times for good user experience",
        acceptance_criteria=[
            "95% of authentication requests complete within 2 seconds",
            "System supports concurrent authentication requests",
        ],
        priority=NfrPriority.SHOULD_HAVE,
    ),
)

_UPLOAD_NFRS = (
    NonFunctionalRequirement(
        category=NfrCategory.SECURITY,
        requirement="Uploaded files shall be scanned for malware and restricted by type and size",
        rationale="File uploads pose security risks and must be controlled",
        acceptance_criteria=[
            "All uploads scanned by antivirus",
            "File type restrictions enforced",
            "Maximum file size limits applied",
        ],
        priority=NfrPriority.MUST_HAVE,
    ),
    NonFunctionalRequirement(
        category=NfrCategory.PERFORMANCE,
        requirement="File uploads shall support resume functionality and progress indication",
        rationale="Large file uploads need reliability and user feedback",
        acceptance_criteria=[
            "Upload progress displayed to user",
            "Failed uploads can be resumed",
            "Upload speed optimized for large files",
        ],
        priority=NfrPriority.SHOULD_HAVE,
    ),
)

_SEARCH_NFRS = (
    NonFunctionalRequirement(
        category=NfrCategory.PERFORMANCE,
        requirement="Search results shall be returned within 1 second for 95% of queries",
        rationale="Users expect fast search response times",
        acceptance_criteria=[
            "Search index optimized for performance",
            "Results paginated for large datasets",
            "Search suggestions provided for no results",
        ],
        priority=NfrPriority.MUST_HAVE,
    ),
)


def baseline_nfrs(entities: ExtractedEntities) -> list[NonFunctionalRequirement]:
    """Suggest NFRs for each action; the first matching rule wins per action."""
    nfrs: list[NonFunctionalRequirement] = []
    for action in entities.actions:
        lower = action.lower()
        if "login" in lower or "authenticate" in lower:
            nfrs.extend(_AUTHENTICATION_NFRS)
        elif "upload" in lower:
            nfrs.extend(_UPLOAD_NFRS)
        elif "search" in lower or "find" in lower:
            nfrs.extend(_SEARCH_NFRS)
    return nfrs
