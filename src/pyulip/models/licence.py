"""Driving licence (SARATHI) record."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pyulip.models._base import IsoDate, Text, UlipBaseModel


class LicenceCategory(UlipBaseModel):
    """One class of vehicle the licence covers (a ``dlcovs`` entry)."""

    licence_number: Text = Field(default=None, validation_alias=AliasChoices("dcLicno", "licence_number"))
    application_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("dcApplno", "application_number"),
    )
    cov_issue_date: IsoDate = Field(default=None, validation_alias=AliasChoices("dcIssuedt", "cov_issue_date"))
    cov_office_name: Text = Field(default=None, validation_alias=AliasChoices("olaName", "cov_office_name"))
    vehicle_type_abbr: Text = Field(
        default=None,
        validation_alias=AliasChoices("covabbrv", "covAbbrv", "vehicle_type_abbr"),
    )
    vehicle_type_description: Text = Field(
        default=None,
        validation_alias=AliasChoices("covdesc", "covDesc", "vehicle_type_description"),
    )

    @property
    def dedupe_key(self) -> tuple[str, str, str]:
        return (
            self.licence_number or "",
            self.vehicle_type_abbr or "",
            self.vehicle_type_description or "",
        )


class LicenceRecord(UlipBaseModel):
    """Active, unexpired driving licence.

    Built from the SARATHI ``dlobj`` (licence) and ``bioObj`` (holder)
    sections.  Only returned when ``licence_status`` is active and
    ``valid_to`` lies in the future.
    """

    dl_number: str
    """Licence number as requested."""
    dob: str
    """Holder's date of birth as requested (``YYYY-MM-DD``)."""

    full_name: Text = Field(default=None, validation_alias=AliasChoices("bioFullName", "bioName", "full_name"))
    blood_group: Text = Field(default=None, validation_alias=AliasChoices("bioBloodGroup", "blood_group"))
    address_line_1: Text = Field(
        default=None,
        validation_alias=AliasChoices("bioPermAdd1", "bioTempAdd1", "address_line_1"),
    )
    address_line_2: Text = Field(
        default=None,
        validation_alias=AliasChoices("bioPermAdd2", "bioTempAdd2", "address_line_2"),
    )
    gender: Text = Field(default=None, validation_alias=AliasChoices("bioGenderDesc", "bioGender", "gender"))

    bio_id: Text = Field(default=None, validation_alias=AliasChoices("bioid", "bioId", "bio_id"))
    issued_at: IsoDate = Field(default=None, validation_alias=AliasChoices("dlIssuedt", "dlIssueDt", "issued_at"))
    valid_from: IsoDate = Field(default=None, validation_alias=AliasChoices("dlNtValdfrDt", "valid_from"))
    valid_to: IsoDate = Field(default=None, validation_alias=AliasChoices("dlNtValdtoDt", "valid_to"))
    licence_status: Text = Field(default=None, validation_alias=AliasChoices("dlStatus", "licence_status"))
    rto_name: Text = Field(default=None, validation_alias=AliasChoices("omRtoFullname", "rto_name"))
    rto_code: Text = Field(default=None, validation_alias=AliasChoices("dlRtoCode", "rto_code"))

    categories: list[LicenceCategory] = Field(default_factory=list)
