"""Vehicle registration (VAHAN) record."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pyulip.models._base import DmyDate, Text, UlipBaseModel


class RegistryRecord(UlipBaseModel):
    """Registration certificate details for one vehicle.

    Fields are mapped from the VAHAN XML document.  VAHAN versions spell
    the same element differently (``rc_owner_name`` / ``Owner_name`` /
    ...), so each field lists every known spelling.
    """

    vehicle_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_regn_no", "Regn_no", "registration_number", "vehicle_number"),
    )
    """Registration number as reported by VAHAN (falls back to the requested number)."""

    owner_name: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_owner_name", "Owner_name", "ownerName", "owner_name"),
    )
    address: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_permanent_address", "Permanent_address", "permanent_address"),
    )
    status: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_status", "Status", "vehicleStatus", "rc_status_as_on"),
    )

    rc_registration_date: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_regn_dt", "Registration_date", "registrationDate"),
    )
    fitness_certificate_expiry: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_regn_upto", "Registration_valid_upto", "regn_valid_upto"),
    )
    insurance_expiry: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_insurance_upto", "Insurance_valid_upto", "insuranceValidTill"),
    )
    tax_expiry: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_tax_upto", "Tax_valid_upto"),
    )
    permit_expiry: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_permit_valid_upto", "Permit_valid_upto", "rc_permit_upto"),
    )
    pucc_expiry: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_pucc_upto", "PUCC_valid_upto", "pucc_valid_upto"),
    )
    national_permit_expiry: DmyDate = Field(
        default=None,
        validation_alias=AliasChoices("rc_np_upto", "National_permit_valid_upto", "np_valid_upto"),
    )

    permit_type: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_permit_type", "Permit_type", "permit_type"),
    )
    pucc_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_pucc_no", "PUCC_no", "pucc_no"),
    )
    permit_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_permit_no", "Permit_no", "permit_no"),
    )
    insurer: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_insurance_comp", "Insurance_comp", "insurance_company"),
    )
    insurance_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_insurance_policy_no", "Insurance_policy_no", "insurance_policy_no"),
    )
    financier: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_financer", "Financer", "financier"),
    )

    vehicle_class: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_vh_class_desc", "Vehicle_class_desc", "vehicleClass"),
    )
    body_type: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_body_type_desc", "Body_type_desc", "body_type"),
    )
    fuel_type: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_fuel_desc", "Fuel_desc", "fuelType"),
    )
    chassis_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_chasi_no", "Chasi_no", "chassisNumber"),
    )
    engine_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_eng_no", "Engine_no", "engineNumber"),
    )
    manufacturer: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_maker_desc", "Maker_desc", "manufacturer"),
    )
    model: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_maker_model", "Maker_model", "model"),
    )
    norms_type: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_norms_desc", "Norms_desc", "norms_type"),
    )
    vehicle_category: Text = Field(
        default=None,
        validation_alias=AliasChoices("rc_vch_catg", "Vehicle_category", "vehicle_category"),
    )
