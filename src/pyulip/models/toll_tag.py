"""Toll tag (FASTAG) record."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pyulip.models._base import Text, UlipBaseModel


class TollTransaction(UlipBaseModel):
    """One toll plaza read from the FASTAG transaction history."""

    reader_read_time: Text = Field(default=None, validation_alias=AliasChoices("readerReadTime", "reader_read_time"))
    seq_no: Text = Field(default=None, validation_alias=AliasChoices("seqNo", "seq_no"))
    lane_direction: Text = Field(default=None, validation_alias=AliasChoices("laneDirection", "lane_direction"))
    toll_plaza_geocode: Text = Field(
        default=None,
        validation_alias=AliasChoices("tollPlazaGeocode", "toll_plaza_geocode"),
    )
    toll_plaza_name: Text = Field(default=None, validation_alias=AliasChoices("tollPlazaName", "toll_plaza_name"))
    vehicle_type: Text = Field(default=None, validation_alias=AliasChoices("vehicleType", "vehicle_type"))
    vehicle_reg_no: Text = Field(default=None, validation_alias=AliasChoices("vehicleRegNo", "vehicle_reg_no"))


class TollTagHistory(UlipBaseModel):
    """Transaction history block (``vehicle`` / ``vehltxnList``) of FASTAG/01."""

    err_code: Text = Field(default=None, validation_alias=AliasChoices("errCode", "err_code"))
    total_tags_in_msg: Text = Field(default=None, validation_alias=AliasChoices("totalTagsInMsg", "total_tags_in_msg"))
    msg_num: Text = Field(default=None, validation_alias=AliasChoices("msgNum", "msg_num"))
    total_tags_in_response: Text = Field(
        default=None,
        validation_alias=AliasChoices("totalTagsInresponse", "totalTagsInResponse", "total_tags_in_response"),
    )
    total_msg: Text = Field(default=None, validation_alias=AliasChoices("totalMsg", "total_msg"))
    transactions: list[TollTransaction] = Field(default_factory=list)


class TollTagDetail(UlipBaseModel):
    """Static tag details from FASTAG/02 (name/value list turned into a mapping)."""

    tag_id: Text = Field(default=None, validation_alias=AliasChoices("tagId", "TagID", "tagID", "tag_id"))
    tid: Text = Field(default=None, validation_alias=AliasChoices("TID", "tid"))
    tag_status: Text = Field(default=None, validation_alias=AliasChoices("tagStatus", "TagStatus", "status"))
    exception_code: Text = Field(
        default=None,
        validation_alias=AliasChoices("excCode", "exceptionCode", "ExcCode", "exception_code"),
    )
    issuer_bank: Text = Field(
        default=None,
        validation_alias=AliasChoices("issuerBank", "IssuerBank", "bankId", "bankName", "issuer_bank"),
    )
    vehicle_class: Text = Field(
        default=None,
        validation_alias=AliasChoices("vehicleClass", "VehicleClass", "vehClass", "vehicle_class"),
    )
    issue_date: Text = Field(
        default=None,
        validation_alias=AliasChoices("issueDate", "tagIssueDate", "IssueDate", "issue_date"),
    )
    commercial_vehicle: Text = Field(
        default=None,
        validation_alias=AliasChoices("comvehicle", "commercialVehicle", "ComVehicle", "commercial_vehicle"),
    )
    registration_number: Text = Field(
        default=None,
        validation_alias=AliasChoices("regNumber", "RegNumber", "vehicleRegNo", "registration_number"),
    )


class TollTagRecord(UlipBaseModel):
    """Merged toll-tag view: transaction history plus static tag details."""

    vehicle_number: Text = Field(default=None, validation_alias=AliasChoices("vehicle_number"))
    result: Text = Field(default=None, validation_alias=AliasChoices("result"))
    resp_code: Text = Field(default=None, validation_alias=AliasChoices("respCode", "resp_code"))
    timestamp: Text = Field(default=None, validation_alias=AliasChoices("ts", "timestamp"))
    vehicle: TollTagHistory = Field(default_factory=TollTagHistory)
    tag: TollTagDetail = Field(default_factory=TollTagDetail)
