"""The HIPAA Compliance Guardian operation catalog.

``catalog_entries`` builds the fixed table of operations for a loaded
knowledge base; ``build_registry`` registers them. Handlers close over the
store and never write to it.

Three handler shapes occur:

* store lookups, returning a knowledge base topic verbatim
* static checklists, returning an embedded template
* templated responses, interpolating validated arguments into a template
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hipaa_guardian.core.knowledge import KnowledgeStore
from hipaa_guardian.core.logging import get_logger
from hipaa_guardian.operations import templates
from hipaa_guardian.operations.registry import Handler, OperationDescriptor, OperationRegistry
from hipaa_guardian.operations.shapes import NO_INPUT, InputField, InputShape

logger = get_logger(__name__)

CORE_TERMS = ("PHI", "Business Associate", "De-Identification", "Patient Rights")

# (operation, topic key, description)
STORE_LOOKUPS: tuple[tuple[str, str, str], ...] = (
    (
        "evaluateComplianceNeed",
        "do_i_need_to_be_hipaa_compliant?",
        "Provides a decision flowchart and examples to determine if an application needs to be "
        "HIPAA compliant. Use this before starting any development.",
    ),
    (
        "getComplianceRoadmap",
        "becoming_hipaa_compliant",
        "Returns a step-by-step roadmap for an organization to become HIPAA compliant, including "
        "administrative and policy requirements.",
    ),
    (
        "getSecurityRuleSafeguards",
        "hipaa_security_rule",
        "Provides a developer-focused guide to the Administrative, Physical, and Technical "
        "Safeguards of the HIPAA Security Rule.",
    ),
    (
        "getMobileSecurityControls",
        "mobile_and_wearable_applications",
        "Returns a checklist of specific security controls for mobile and wearable apps, including "
        "data storage, transmission, and notifications.",
    ),
    (
        "getPenaltyInformation",
        "hipaa_fines",
        "Returns the up-to-date, four-tiered structure of civil monetary penalties (fines) for "
        "HIPAA violations.",
    ),
    (
        "getValidationAndAuditInfo",
        "who_validates_hipaa_compliance",
        'Explains why there is no official "HIPAA Certification" and details how compliance is '
        "demonstrated through third-party audits and attestations like HITRUST and SOC 2.",
    ),
    (
        "getDeveloperConsiderations",
        "developer_considerations",
        'Provides guidance on key developer decisions, including the cloud Shared Responsibility '
        'Model and a framework for "Build vs. Outsource" choices.',
    ),
)

# (operation, template, description)
STATIC_CHECKLISTS: tuple[tuple[str, str, str], ...] = (
    (
        "getBreachResponseChecklist",
        templates.BREACH_RESPONSE_CHECKLIST,
        "Provides an actionable checklist for incident response according to the HIPAA Breach "
        "Notification Rule, including timelines and notification requirements.",
    ),
    (
        "getSecureCodingChecklist",
        templates.SECURE_CODING_CHECKLIST,
        "Provides a checklist for developers to ensure HIPAA compliance throughout the Software "
        "Development Lifecycle (SDLC).",
    ),
    (
        "getApiSecurityChecklist",
        templates.API_SECURITY_CHECKLIST,
        "Provides a general-purpose checklist for securing backend APIs, based on OWASP best "
        "practices.",
    ),
    (
        "getPrivacyPolicyPoints",
        templates.PRIVACY_POLICY_POINTS,
        "Provides a checklist of key sections and topics that should be included in a user-facing "
        "privacy policy. This is for guidance only and is not legal advice.",
    ),
    (
        "getGeneralDataSecurityChecklist",
        templates.GENERAL_DATA_SECURITY_CHECKLIST,
        "Provides a general checklist for handling sensitive Personally Identifiable Information "
        "(PII), even if it is not PHI.",
    ),
)

CORE_DEFINITIONS_SHAPE = InputShape.of(
    InputField("term", kind="enum", choices=CORE_TERMS),
    model_name="GetCoreDefinitionsArguments",
)

VENDOR_VETTING_SHAPE = InputShape.of(
    InputField(
        "vendorName",
        description="The name of the third-party service being considered, "
        "e.g., 'Twilio', 'Google Cloud', 'Zendesk'",
    ),
    model_name="GetVendorVettingChecklistArguments",
)

CODE_COMPLIANCE_SHAPE = InputShape.of(
    InputField("codeSnippet", description="The proposed code the agent intends to write."),
    InputField(
        "checklist",
        description="The full text of the checklist the code must be validated against.",
    ),
    InputField(
        "justification",
        description="A point-by-point explanation of how the codeSnippet satisfies each item "
        "in the checklist.",
    ),
    model_name="ConfirmCodeComplianceArguments",
)


def lookup_handler(store: KnowledgeStore, topic: str) -> Handler:
    """Handler returning ``topic`` from ``store`` verbatim."""

    def handler(arguments: Mapping[str, Any]) -> str:
        return store.get(topic)

    return handler


def static_handler(text: str) -> Handler:
    def handler(arguments: Mapping[str, Any]) -> str:
        return text

    return handler


def core_definitions_handler(store: KnowledgeStore) -> Handler:
    # ``term`` is validated against CORE_TERMS but the whole section is returned
    def handler(arguments: Mapping[str, Any]) -> str:
        return templates.fill_template(
            templates.CORE_DEFINITIONS_HEADER,
            definitions=store.get("what_is_hipaa?"),
        )

    return handler


def vendor_vetting_handler(arguments: Mapping[str, Any]) -> str:
    return templates.fill_template(
        templates.VENDOR_VETTING_CHECKLIST,
        vendor_name=arguments["vendorName"],
    )


def confirm_code_compliance_handler(arguments: Mapping[str, Any]) -> str:
    """Echo the caller's justification under a confirmation header.

    Nothing is verified. The operation exists so a caller must produce a
    point-by-point justification before it gets a response.
    """
    return templates.fill_template(
        templates.COMPLIANCE_CONFIRMATION,
        justification=arguments["justification"],
    )


def catalog_entries(store: KnowledgeStore) -> list[OperationDescriptor]:
    """The fixed operation table, in advertised order."""
    lookups = {
        name: OperationDescriptor(name, lookup_handler(store, topic), NO_INPUT, description)
        for name, topic, description in STORE_LOOKUPS
    }
    checklists = {
        name: OperationDescriptor(name, static_handler(text), NO_INPUT, description)
        for name, text, description in STATIC_CHECKLISTS
    }

    return [
        lookups["evaluateComplianceNeed"],
        lookups["getComplianceRoadmap"],
        OperationDescriptor(
            "getCoreDefinitions",
            core_definitions_handler(store),
            CORE_DEFINITIONS_SHAPE,
            "Provides foundational definitions for terms like PHI (Protected Health Information), "
            "Business Associate, and De-Identification.",
        ),
        lookups["getSecurityRuleSafeguards"],
        lookups["getMobileSecurityControls"],
        lookups["getPenaltyInformation"],
        lookups["getValidationAndAuditInfo"],
        lookups["getDeveloperConsiderations"],
        checklists["getBreachResponseChecklist"],
        checklists["getSecureCodingChecklist"],
        OperationDescriptor(
            "getVendorVettingChecklist",
            vendor_vetting_handler,
            VENDOR_VETTING_SHAPE,
            "Provides a checklist for evaluating a third-party vendor (Business Associate) to "
            "ensure they meet HIPAA compliance standards before integration.",
        ),
        checklists["getApiSecurityChecklist"],
        checklists["getPrivacyPolicyPoints"],
        checklists["getGeneralDataSecurityChecklist"],
        OperationDescriptor(
            "confirmCodeCompliance",
            confirm_code_compliance_handler,
            CODE_COMPLIANCE_SHAPE,
            "Takes a snippet of code and a relevant compliance checklist (e.g., from "
            "getSecureCodingChecklist) and requires the agent to provide a point-by-point "
            "justification of how the code meets each requirement. This must be the last step "
            "before outputting code.",
        ),
    ]


def build_registry(store: KnowledgeStore) -> OperationRegistry:
    """Register every catalog operation against ``store``."""
    registry = OperationRegistry()
    for descriptor in catalog_entries(store):
        registry.register(descriptor)
    logger.info("operations_registered", count=len(registry))
    return registry


__all__ = [
    "CORE_TERMS",
    "STORE_LOOKUPS",
    "STATIC_CHECKLISTS",
    "catalog_entries",
    "build_registry",
]
