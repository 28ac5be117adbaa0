"""Required-document catalogue per service type (what a case must contain)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequiredDocument:
    document_type: str
    name: str
    description: str
    required: bool = True


REQUIRED_DOCUMENTS_BY_SERVICE: dict[str, tuple[RequiredDocument, ...]] = {
    "portuguese_citizenship": (
        RequiredDocument("birth_certificate", "Birth Certificate", "Full-content birth certificate"),
        RequiredDocument(
            "marriage_certificate", "Marriage Certificate", "Marriage certificate (if applicable)", required=False
        ),
        RequiredDocument("passport", "Passport", "Copy of every passport page"),
        RequiredDocument(
            "ancestor_birth_certificate",
            "Portuguese Ancestor Birth Certificate",
            "Certificate of the Portuguese relative in the line of descent",
        ),
        RequiredDocument("proof_of_address", "Proof of Address", "Document proving current address"),
    ),
    "d7_visa": (
        RequiredDocument("passport", "Passport", "Passport valid for at least 6 more months"),
        RequiredDocument("income_statement", "Proof of Income", "Passive income or pension statement"),
        RequiredDocument("health_insurance", "Health Insurance", "International cover valid in Portugal"),
        RequiredDocument("criminal_record", "Criminal Record Certificate", "Clean criminal record certificate"),
        RequiredDocument("proof_of_accommodation", "Proof of Accommodation", "Accommodation in Portugal"),
        RequiredDocument("photo", "Photos", "Recent passport-standard photos"),
    ),
    "d2_visa": (
        RequiredDocument("passport", "Passport", "Passport valid for at least 6 more months"),
        RequiredDocument("business_plan", "Business Plan", "Detailed business plan for Portugal"),
        RequiredDocument("proof_of_investment", "Proof of Investment", "Capital available to invest"),
        RequiredDocument("criminal_record", "Criminal Record Certificate", "Clean criminal record certificate"),
        RequiredDocument("health_insurance", "Health Insurance", "International cover valid in Portugal"),
        RequiredDocument("curriculum_vitae", "Curriculum Vitae", "Up-to-date CV"),
    ),
    "residence_permit": (
        RequiredDocument("passport", "Passport", "Valid passport"),
        RequiredDocument("entry_visa", "Entry Visa", "Visa used to enter Portugal"),
        RequiredDocument("income_statement", "Proof of Means of Subsistence", "Proof of financial resources"),
        RequiredDocument("proof_of_accommodation", "Proof of Accommodation", "Accommodation in Portugal"),
        RequiredDocument("health_insurance", "Health Insurance", "Health insurance or SNS registration"),
        RequiredDocument("tax_number", "NIF", "Portuguese tax identification number"),
    ),
    "visa_renewal": (
        RequiredDocument("passport", "Passport", "Current valid passport"),
        RequiredDocument("previous_residence_permit", "Previous Residence Permit", "Permit being renewed"),
        RequiredDocument("income_statement", "Proof of Means of Subsistence", "Updated proof of resources"),
        RequiredDocument("proof_of_accommodation", "Proof of Accommodation", "Current accommodation"),
        RequiredDocument("health_insurance", "Health Insurance", "Updated health insurance"),
        RequiredDocument("fee_receipt", "Fee Payment Receipt", "Renewal fee payment"),
    ),
}


def get_required_documents(service_type: str) -> tuple[RequiredDocument, ...]:
    """Return the catalogue entries for a service type (empty for unknown types)."""
    return REQUIRED_DOCUMENTS_BY_SERVICE.get(service_type, ())


def get_service_types() -> list[str]:
    return list(REQUIRED_DOCUMENTS_BY_SERVICE)
