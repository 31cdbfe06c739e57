"""Deployed plan metadata schema.

Single source of truth for the metadata attributes stored on plan records.
Fields may be added, changed or removed as business requirements evolve;
stored keys that drop out of this schema surface as legacy fields.
"""

from __future__ import annotations

from .definition_builders import (
    build_schema_document,
    define_field,
    define_section,
    define_variant,
)

_MONEY = {"minimum": 0}

_FINANCIALS = define_section(
    "Financials",
    "Monthly premiums, givebacks, and maximum out-of-pocket limits",
    [
        define_field(
            "premium_monthly",
            "number",
            "Premium (monthly)",
            characteristics={
                "concept": "premium",
                "frequency": "monthly",
                "eligibility": "medicare",
                "direction": "debit",
                "unit": "$",
            },
            tags=("financial", "cost-sharing"),
            validation=_MONEY,
            variants=[
                define_variant(
                    "premium_monthly_with_extra_help",
                    "with Extra Help",
                    characteristics={"eligibility": "lis", "frequency": "monthly", "unit": "$"},
                ),
                define_variant(
                    "premium_monthly_medicaid_qmb",
                    "with Medicaid",
                    characteristics={"eligibility": "qmb", "frequency": "monthly", "unit": "$"},
                ),
            ],
        ),
        define_field(
            "giveback_monthly",
            "number",
            "Giveback (monthly)",
            characteristics={
                "concept": "giveback",
                "frequency": "monthly",
                "eligibility": "medicare",
                "direction": "credit",
                "unit": "$",
            },
            tags=("financial",),
            validation=_MONEY,
        ),
        define_field(
            "moop_annual",
            "number",
            "MOOP (annual)",
            description="Maximum Out-of-Pocket annual limit in dollars",
            characteristics={
                "concept": "moop",
                "frequency": "yearly",
                "eligibility": "medicare",
                "direction": "debit",
                "unit": "$",
            },
            tags=("financial", "cost-sharing"),
            validation=_MONEY,
        ),
    ],
)

_DEDUCTIBLES = define_section(
    "Deductibles",
    "Medical and prescription drug deductibles",
    [
        define_field(
            "medical_deductible",
            "number",
            "Medical Deductible",
            characteristics={
                "concept": "deductible",
                "type": "medical",
                "frequency": "yearly",
                "eligibility": "medicare",
                "direction": "debit",
                "unit": "$",
            },
            tags=("cost-sharing",),
            validation=_MONEY,
            variants=[
                define_variant(
                    "medical_deductible_with_medicaid",
                    "with Medicaid",
                    characteristics={
                        "eligibility": "qmb",
                        "modifier": "with_assistance",
                        "frequency": "yearly",
                        "unit": "$",
                    },
                ),
            ],
        ),
        define_field(
            "rx_deductible_tier345",
            "number",
            "RX Deductible (Tiers 3-5)",
            characteristics={
                "concept": "deductible",
                "type": "prescription",
                "eligibility": "medicare",
                "direction": "debit",
                "modifier": "tier345",
                "unit": "$",
            },
            tags=("cost-sharing",),
            validation=_MONEY,
            variants=[
                define_variant(
                    "rx_deductible_tier345_with_medicaid",
                    "with Medicaid",
                    characteristics={
                        "eligibility": "qmb",
                        "modifier": "tier345",
                        "frequency": "yearly",
                        "unit": "$",
                    },
                ),
            ],
        ),
    ],
)


def _benefit(key: str, benefit_type: str, label: str, frequency: str = "yearly") -> dict:
    return define_field(
        key,
        "number",
        label,
        characteristics={
            "concept": "benefit",
            "type": benefit_type,
            "frequency": frequency,
            "eligibility": "medicare",
            "direction": "credit",
            "unit": "$",
        },
        tags=("benefit",),
        validation=_MONEY,
    )


_BENEFITS = define_section(
    "Benefits",
    "Benefits and allowances",
    [
        _benefit("otc_benefit_quarterly", "otc", "OTC Benefit (quarterly)", "quarterly"),
        _benefit("card_benefit", "card", "Card Benefit (monthly)", "monthly"),
        _benefit("dental_benefit_yearly", "dental", "Dental (yearly)"),
        _benefit("vision_benefit_yearly", "vision", "Vision (yearly)"),
        _benefit("hearing_benefit_yearly", "hearing", "Hearing (yearly)"),
    ],
)


def _copay(key: str, copay_type: str, label: str, description: str, **extra) -> dict:
    characteristics = {
        "concept": "copay",
        "type": copay_type,
        "eligibility": "medicare",
        "direction": "debit",
        "unit": "$",
    }
    if extra.get("frequency"):
        characteristics["frequency"] = extra["frequency"]
    return define_field(
        key,
        "number",
        label,
        description=description,
        characteristics=characteristics,
        tags=("cost-sharing",),
        validation=_MONEY,
        variants=extra.get("variants", ()),
    )


_DOCTOR_COPAYS = define_section(
    "Doctor Copays",
    "Copays for doctor visits and attendance",
    [
        _copay(
            "primary_care_copay",
            "primary_care",
            "PCP Copay",
            "Primary care physician copay amount in dollars",
        ),
        _copay(
            "specialist_copay",
            "specialist",
            "Specialist Copay",
            "Specialist physician copay amount in dollars",
        ),
    ],
)

_HOSPITAL_COPAYS = define_section(
    "Hospital Copays",
    "Copays for hospital stays and visits",
    [
        define_field(
            "hospital_inpatient_days",
            "number",
            "Hospital Days",
            description="Days hospital inpatient copay required, after which the copay is zero",
            characteristics={
                "concept": "coverage_limit",
                "type": "hospital_inpatient",
                "eligibility": "medicare",
            },
            tags=("cost-sharing",),
            validation=_MONEY,
        ),
        _copay(
            "hospital_inpatient_per_day_copay",
            "hospital_inpatient",
            "Hospital Copay (daily)",
            "Daily hospital inpatient copay amount in dollars",
            frequency="daily",
            variants=[
                define_variant(
                    "hospital_inpatient_with_assistance_per_stay_copay",
                    "with assistance, per stay",
                    characteristics={
                        "eligibility": "qmb+",
                        "unit": "$",
                        "frequency": "per_stay",
                        "modifier": "with_assistance",
                    },
                ),
                define_variant(
                    "hospital_inpatient_without_assistance_per_stay_copay",
                    "without assistance, per stay",
                    characteristics={
                        "eligibility": "medicare",
                        "unit": "$",
                        "frequency": "per_stay",
                        "modifier": "without_assistance",
                    },
                ),
            ],
        ),
        _copay(
            "skilled_nursing_per_day_copay",
            "skilled_nursing",
            "Skilled Nursing (per day)",
            "Skilled nursing per day copay amount in dollars",
            frequency="daily",
            variants=[
                define_variant(
                    "skilled_nursing_with_assistance_per_stay_copay",
                    "with assistance, per stay",
                    characteristics={
                        "eligibility": "slmb+",
                        "unit": "$",
                        "frequency": "per_stay",
                        "modifier": "with_assistance",
                    },
                ),
            ],
        ),
    ],
)

_EMERGENCY_COPAYS = define_section(
    "Emergency Copays",
    "Copays for emergency services",
    [
        _copay(
            "emergency_room_copay",
            "emergency_room",
            "ER Copay",
            "Emergency room visit copay amount in dollars",
            variants=[
                define_variant(
                    "emergency_with_assistance_copay",
                    "ER Copay (with assistance)",
                    description="Emergency room visit copay amount with assistance in dollars",
                    characteristics={
                        "eligibility": ["medicaid", "fbde"],
                        "modifier": "with_assistance",
                        "unit": "$",
                    },
                ),
            ],
        ),
        _copay(
            "urgent_care_copay",
            "urgent_care",
            "Urgent Care Copay",
            "Urgent care visit copay amount in dollars",
        ),
        _copay(
            "ambulance_copay",
            "ambulance",
            "Ambulance Copay",
            "Ambulance service ground or air",
            variants=[
                define_variant(
                    "ambulance_with_assistance_copay",
                    "Ambulance Copay (with assistance)",
                    description="Ambulance service copay amount with assistance in dollars",
                    characteristics={
                        "eligibility": ["medicaid", "qdwi"],
                        "modifier": "with_assistance",
                        "unit": "$",
                    },
                ),
            ],
        ),
    ],
)

_ADDITIONAL_BENEFITS = define_section(
    "Additional Benefits",
    "Card, fitness, and transportation benefits",
    [
        define_field(
            "fitness_benefit",
            "string",
            "Fitness Benefit",
            description="Fitness/gym membership benefit description",
            characteristics={
                "concept": "benefit",
                "type": "fitness",
                "eligibility": "medicare",
                "direction": "credit",
            },
            tags=("benefit",),
        ),
        define_field(
            "transportation_benefit",
            "number",
            "Transportation Benefit",
            description="Transportation/rides benefit amount in dollars",
            characteristics={
                "concept": "benefit",
                "type": "transportation",
                "eligibility": "medicare",
                "direction": "credit",
                "unit": "$",
            },
            tags=("benefit",),
            validation=_MONEY,
        ),
    ],
)

_PLAN_INFORMATION = define_section(
    "Plan Information",
    "General plan details and descriptions",
    [
        define_field(
            "rx_cost_share",
            "string",
            "RX Cost Share",
            description="Prescription drug cost sharing details (e.g., '20% after deductible')",
        ),
        define_field(
            "pharmacy_benefit",
            "string",
            "Pharmacy Benefit",
            description="Pharmacy benefit description",
        ),
        define_field(
            "service_area",
            "string",
            "Service Area",
            description="Service area description (e.g., 'Statewide', 'Multi-state')",
        ),
        define_field("summary", "string", "Summary", description="Plan summary or overview"),
        define_field(
            "notes", "string", "Notes", description="General plan notes and additional information"
        ),
        define_field(
            "medicaid_eligibility",
            "string",
            "Medicaid Eligibility",
            description="Medicaid eligibility requirements",
        ),
        define_field(
            "transitioned_from",
            "string",
            "Transitioned From",
            description="Information about plan transitions or predecessor plans",
        ),
    ],
)

_PLAN_DATES = define_section(
    "Plan Dates",
    "Plan effective dates and periods",
    [
        define_field(
            "effective_start",
            "string",
            "Effective Start Date",
            description="Plan effective start date in YYYY-MM-DD format",
            field_format="date",
        ),
        define_field(
            "effective_end",
            "string",
            "Effective End Date",
            description="Plan effective end date in YYYY-MM-DD format",
            field_format="date",
        ),
    ],
)

PLANS_METADATA_SCHEMA = build_schema_document(
    [
        _FINANCIALS,
        _DEDUCTIBLES,
        _BENEFITS,
        _DOCTOR_COPAYS,
        _HOSPITAL_COPAYS,
        _EMERGENCY_COPAYS,
        _ADDITIONAL_BENEFITS,
        _PLAN_INFORMATION,
        _PLAN_DATES,
    ],
    title="Plans Metadata Schema",
    description="Schema definition for the metadata stored on plan records.",
    additionalProperties=True,
)
