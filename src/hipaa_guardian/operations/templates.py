"""Checklist templates served without a knowledge base lookup.

Templates are plain data. Placeholders use ``str.format`` field syntax
(``{vendor_name}``) and are filled by ``fill_template``; templates without
placeholders are returned as-is.
"""

from __future__ import annotations

from string import Formatter
from typing import Any

from hipaa_guardian.core.errors import TemplateError

BREACH_RESPONSE_CHECKLIST = """
# HIPAA Breach Response Checklist

This is a high-level guide. Consult your legal counsel immediately upon discovering a potential breach.

**Phase 1: Immediate Response (First 24 Hours)**
1.  **Identify and Contain:** Stop the breach immediately. Isolate affected systems. Preserve all evidence.
2.  **Assemble Response Team:** Convene your designated incident response team, including your Security Official and legal counsel.
3.  **Preliminary Assessment:** Determine the nature of the breach. What data was exposed? How many individuals are potentially affected?

**Phase 2: Investigation and Risk Assessment (Days 1-60)**
1.  **Perform a Risk Assessment:** You MUST assess the probability that PHI has been compromised based on four factors:
    * The nature and extent of the PHI involved.
    * The unauthorized person who used the PHI or to whom the disclosure was made.
    * Whether the PHI was actually acquired or viewed.
    * The extent to which the risk to the PHI has been mitigated.
2.  **Document Everything:** Every action, decision, and finding must be meticulously documented.

**Phase 3: Notification (Without Unreasonable Delay and No Later Than 60 Days)**
1.  **Notify Affected Individuals:** Send written notifications to all affected individuals.
2.  **Notify HHS:** For breaches affecting 500 or more individuals, you must notify the Secretary of HHS at the same time as individuals. For smaller breaches, you can report them annually.
3.  **Notify the Media:** For breaches affecting more than 500 residents of a specific state or jurisdiction, you must notify prominent media outlets serving that area.
"""

SECURE_CODING_CHECKLIST = """
# HIPAA Secure SDLC Checklist

1.  **Data Minimization:** Does this feature only collect the minimum necessary PHI to function?
2.  **Input Validation:** Are all inputs that could potentially contain PHI (e.g., text fields, file uploads) properly validated and sanitized to prevent injection attacks?
3.  **Authentication & Authorization:** Is every endpoint that touches PHI protected with authentication? Does the code check if the authenticated user is authorized to access the specific record they are requesting?
4.  **Secure Data Transmission:** Is all data, especially PHI, transmitted using strong, modern TLS (1.2+)?
5.  **Secure Data Storage:** Is sensitive data encrypted at rest? Are you using platform-recommended secure storage APIs for tokens and keys?
6.  **Audit Logging:** Does the code generate a detailed, immutable audit log for any action that creates, reads, updates, or deletes PHI? The log must include user ID, timestamp, and action taken.
7.  **Error Handling & Information Disclosure:** Do error messages avoid revealing sensitive information (e.g., "User 'john.doe@email.com' not found" is a disclosure; "Invalid username or password" is not).
8.  **Dependency Scanning:** Are you regularly scanning third-party libraries for known vulnerabilities?
"""

VENDOR_VETTING_CHECKLIST = """
# Business Associate Vetting Checklist for {vendor_name}

Before integrating with {vendor_name} or any vendor that will handle PHI, you must perform due diligence.

1.  **Will They Sign a BAA?**: This is the first and most important question. If the answer is no, you cannot use them for PHI. Period.
2.  **Review Their Compliance Documentation:** Does {vendor_name} have a public-facing trust center or compliance page detailing their HIPAA-eligible services?
3.  **Check for Independent Audits:** Do they have a SOC 2 Type 2 report or a HITRUST certification? Request and review these documents.
4.  **Shared Responsibility Model:** Does {vendor_name} clearly document what they are responsible for versus what you are responsible for in maintaining compliance?
5.  **Data Residency and Control:** Can you control where the data is stored geographically?
6.  **Breach Notification:** What is their process and timeline for notifying you in the event of a breach on their end? This must be outlined in the BAA.
7.  **Data Disposal:** What is their policy for securely deleting your data when you terminate your service with them?
"""

API_SECURITY_CHECKLIST = """
# General API Security Checklist (OWASP Based)

1.  **Authentication:** Implement a standard, strong authentication mechanism (e.g., OAuth 2.0, JWT). Do not roll your own.
2.  **Authorization:** Enforce authorization at every endpoint. Check that the authenticated user has the correct permissions to perform the requested action on the requested resource (e.g., User A cannot access User B's data).
3.  **Input Validation:** Validate all incoming data for type, format, and length. Reject any invalid data. This protects against injection attacks.
4.  **Rate Limiting:** Implement rate limiting to protect against denial-of-service (DoS) and brute-force attacks.
5.  **Use HTTPS Everywhere:** All API endpoints must enforce TLS 1.2 or higher.
6.  **Proper Error Handling:** Return generic error messages. Do not leak sensitive information like stack traces or internal function names.
7.  **Security Headers:** Use security headers like Content-Security-Policy, Strict-Transport-Security, and X-Content-Type-Options.
8.  **Logging and Monitoring:** Log all API requests and monitor for suspicious activity, such as high error rates or access attempts from unusual locations.
"""

PRIVACY_POLICY_POINTS = """
# Key Topics for a Privacy Policy

This is a guide to help structure a privacy policy. You must consult with legal counsel to draft the final document.

1.  **What Information We Collect:**
    * Explicitly list the types of data you collect (e.g., email address, name, IP address, usage data).
    * Distinguish between data the user provides directly and data you collect automatically.
2.  **How We Use Your Information:**
    * Explain the purpose for collecting the data (e.g., to provide the service, for marketing, for analytics).
3.  **How We Share Your Information:**
    * List the categories of third parties with whom you share data (e.g., cloud providers, analytics services, payment processors).
    * Explain the circumstances under which you might share data (e.g., with user consent, for legal reasons).
4.  **Data Security:**
    * Briefly describe the measures you take to protect user data (e.g., encryption, access controls).
5.  **Data Retention:**
    * Explain how long you keep user data and your policy for deleting it.
6.  **Your Rights and Choices:**
    * Detail the rights users have regarding their data (e.g., right to access, right to delete, right to opt-out of marketing).
7.  **Contact Information:**
    * Provide a clear way for users to contact you with privacy-related questions.
8.  **Policy Updates:**
    * Explain how you will notify users of changes to the privacy policy.
"""

GENERAL_DATA_SECURITY_CHECKLIST = """
# General PII Security Checklist

1.  **Inventory:** Do you know exactly what PII you are collecting and where it is stored?
2.  **Minimization:** Are you only collecting the PII that is absolutely necessary for your service to function?
3.  **Access Control:** Is access to PII strictly limited on a need-to-know basis?
4.  **Encryption:** Is all PII encrypted both in transit (TLS) and at rest?
5.  **Logging:** Is all access to PII logged and monitored?
6.  **Secure Deletion:** Do you have a process for securely and permanently deleting PII when it is no longer needed or when a user requests it?
7.  **Training:** Is your team trained on how to handle PII securely and what to do in case of a data spill?
"""

CORE_DEFINITIONS_HEADER = "Here are the core definitions from the guide:\n\n{definitions}"

COMPLIANCE_CONFIRMATION = "Compliance Justification Confirmed:\n\n{justification}"


def placeholders(template: str) -> set[str]:
    """Named placeholders referenced by ``template``."""
    return {name for _, name, _, _ in Formatter().parse(template) if name}


def fill_template(template: str, **values: Any) -> str:
    """Substitute named placeholders.

    Values are inserted verbatim; braces inside a value are not interpreted.

    Raises:
        TemplateError: A placeholder has no value.
    """
    missing = sorted(placeholders(template) - values.keys())
    if missing:
        raise TemplateError(f"No value for template placeholders: {', '.join(missing)}")
    return template.format_map(values)
