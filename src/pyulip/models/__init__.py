"""Data models for normalized ULIP records."""

from pyulip.models._base import DmyDate, IsoDate, Text, UlipBaseModel
from pyulip.models.licence import LicenceCategory, LicenceRecord
from pyulip.models.registry import RegistryRecord
from pyulip.models.requests import LicenceLookupRequest, VehicleLookupRequest
from pyulip.models.toll_tag import TollTagDetail, TollTagHistory, TollTagRecord, TollTransaction

__all__ = [
    "DmyDate",
    "IsoDate",
    "LicenceCategory",
    "LicenceLookupRequest",
    "LicenceRecord",
    "RegistryRecord",
    "Text",
    "TollTagDetail",
    "TollTagHistory",
    "TollTagRecord",
    "TollTransaction",
    "UlipBaseModel",
    "VehicleLookupRequest",
]
